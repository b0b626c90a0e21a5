"""Shared fixtures: rule tables and machines used across the test modules."""

from __future__ import annotations

import json

import pytest

from simulator.rule_table import EXAMPLE_RULES, RuleTable
from simulator.turing_machine import TuringMachine

# Final state of the built-in example after it halts.
EXAMPLE_STEPS = 107
EXAMPLE_HEAD = 9
EXAMPLE_WINDOW = (-3, 10)
EXAMPLE_CELLS = [1] * 12 + [0, 1]

# 2-state busy beaver champion: 6 steps, four 1s.
BB2_RULES = [
    [0, 1, 1, 1, 1, 0, 1],
    [1, 1, 0, 0, 1, 1, -1],
]

# Writes 1 and slides left forever.
RUNAWAY_RULES = [
    [0, 1, 0, 0, 1, 0, 0],
]


@pytest.fixture()
def example_table() -> RuleTable:
    return RuleTable.from_rows(EXAMPLE_RULES)


@pytest.fixture()
def example_machine(example_table: RuleTable) -> TuringMachine:
    return TuringMachine(example_table)


@pytest.fixture()
def one_step_table() -> RuleTable:
    """Halts on the very first read: writes 1, moves right, halts."""
    return RuleTable.from_rows([[0, 1, 1, -1, 0, 0, -1]])


@pytest.fixture()
def runaway_table() -> RuleTable:
    return RuleTable.from_rows(RUNAWAY_RULES)


@pytest.fixture()
def config_file(tmp_path):
    """Runtime config pointing all log output into the test's tmp dir."""
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps({"output_directory": str(tmp_path / "logs")}), encoding="utf-8")
    return path
