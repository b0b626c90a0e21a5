import json
import os

DEFAULT_CONFIG = {
    "max_steps": 10_000,
    "max_tape_cells": 1_000_000,
    "result_margin": 3,
    "trace_radius": 10,
    "log_steps": False,
    "output_directory": "logs/",
    "log_file_prefix": "turing_",
    "rules_file": None
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "max_tape_cells": int,
    "result_margin": int,
    "trace_radius": int,
    "log_steps": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "rules_file": (str, type(None))
}

# Smallest accepted value for the integer keys
CONFIG_MINIMUMS = {
    "max_steps": 1,
    "max_tape_cells": 1,
    "result_margin": 0,
    "trace_radius": 0
}


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is an int subclass; don't let true/false pass for counts
        if expected_type is int and isinstance(value, bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")
        if not isinstance(value, expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    for key, minimum in CONFIG_MINIMUMS.items():
        if config[key] < minimum:
            raise ValueError(f"Config key '{key}' must be at least {minimum}, got {config[key]}.")


def load_config(path=None, overrides=None):
    """
    Merge the JSON file at ``path`` (if any) and ``overrides`` over the
    defaults, then validate the result.
    """
    config = DEFAULT_CONFIG.copy()

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found at: {path}")
        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise TypeError(f"Configuration file {path} must hold a JSON object.")
        config.update(user_config)

    if overrides:
        config.update({key: value for key, value in overrides.items() if value is not None})

    validate_config(config)
    return config
