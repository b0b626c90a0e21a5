"""Tests for the command-line driver."""

from __future__ import annotations

import json

import pytest

import app
from conftest import RUNAWAY_RULES
from simulator.rule_table import EXAMPLE_RULES


def _run_log(tmp_path):
    [path] = (tmp_path / "logs").glob("turing_*.jsonl")
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestStepwise:
    def test_runs_example_to_halt(self, tmp_path, config_file, capsys) -> None:
        assert app.main(["--config", str(config_file)]) == app.EXIT_HALTED
        out = capsys.readouterr().out
        assert "Halted after 107 steps" in out
        assert "Final configuration (cells -6..13)" in out

        [entry] = _run_log(tmp_path)
        assert entry["halted"] is True
        assert entry["steps"] == 107
        assert entry["window"] == [-3, 10]
        assert entry["mode"] == "stepwise"

    def test_trace_prints_steps(self, config_file, capsys) -> None:
        assert app.main(["--config", str(config_file), "--trace"]) == app.EXIT_HALTED
        assert "Step 107:" in capsys.readouterr().out

    def test_step_budget(self, tmp_path, config_file) -> None:
        assert app.main(["--config", str(config_file), "--max-steps", "10"]) == app.EXIT_BUDGET
        [entry] = _run_log(tmp_path)
        assert entry["halted"] is False
        assert entry["stopped_on"] == "steps"
        assert entry["steps"] == 10

    def test_step_log(self, tmp_path) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"output_directory": str(tmp_path / "logs"), "log_steps": True}),
                          encoding="utf-8")
        assert app.main(["--config", str(config)]) == app.EXIT_HALTED
        [steps] = (tmp_path / "logs").glob("steps_*.jsonl")
        assert len(steps.read_text(encoding="utf-8").splitlines()) == 107

    def test_rules_file(self, tmp_path, config_file) -> None:
        rules = tmp_path / "one.json"
        rules.write_text(json.dumps([[0, 1, 1, -1, 0, 0, -1]]), encoding="utf-8")
        assert app.main(["--config", str(config_file), "--rules", str(rules)]) == app.EXIT_HALTED
        [entry] = _run_log(tmp_path)
        assert entry["steps"] == 1
        assert entry["result"] == [0, 0, 0, 1, 0, 0, 0]

    def test_blank_result(self, tmp_path, config_file, capsys) -> None:
        rules = tmp_path / "blank.json"
        rules.write_text(json.dumps([[0, 0, 1, -1, 0, 0, -1]]), encoding="utf-8")
        assert app.main(["--config", str(config_file), "--rules", str(rules)]) == app.EXIT_HALTED
        assert "tape is blank" in capsys.readouterr().out
        [entry] = _run_log(tmp_path)
        assert entry["result"] is None


class TestFast:
    def test_fast_matches_stepwise(self, tmp_path, config_file) -> None:
        assert app.main(["--config", str(config_file), "--fast"]) == app.EXIT_HALTED
        [entry] = _run_log(tmp_path)
        assert entry["mode"] == "fast"
        assert entry["steps"] == 107
        assert entry["window"] == [-3, 10]
        assert entry["result"] == [0, 0, 0] + [1] * 12 + [0, 1] + [0, 0, 0]

    def test_fast_budget(self, config_file) -> None:
        assert app.main(["--config", str(config_file), "--fast", "--max-steps", "5"]) == app.EXIT_BUDGET

    def test_trace_and_fast_conflict(self, config_file) -> None:
        with pytest.raises(SystemExit):
            app.main(["--config", str(config_file), "--fast", "--trace"])

    @pytest.mark.parametrize("mode", [[], ["--fast"]])
    def test_tape_ceiling_in_both_modes(self, tmp_path, mode) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"output_directory": str(tmp_path / "logs"), "max_tape_cells": 5}),
                          encoding="utf-8")
        rules = tmp_path / "runaway.json"
        rules.write_text(json.dumps(RUNAWAY_RULES), encoding="utf-8")
        argv = ["--config", str(config), "--rules", str(rules), "--max-steps", "100", *mode]
        assert app.main(argv) == app.EXIT_BUDGET
        [entry] = _run_log(tmp_path)
        assert (entry["stopped_on"], entry["limit"]) == ("tape_cells", 5)
        assert entry["steps"] == 5


class TestErrors:
    def test_malformed_rules(self, tmp_path, config_file, capsys) -> None:
        rules = tmp_path / "bad.json"
        bad = [row[:] for row in EXAMPLE_RULES[:3]]
        bad[1][3] = 5
        rules.write_text(json.dumps(bad), encoding="utf-8")
        assert app.main(["--config", str(config_file), "--rules", str(rules)]) == app.EXIT_ERROR
        assert "Next state 5" in capsys.readouterr().out

    def test_missing_config(self, tmp_path) -> None:
        assert app.main(["--config", str(tmp_path / "absent.json")]) == app.EXIT_ERROR

    def test_inspect(self, config_file, capsys) -> None:
        assert app.main(["--config", str(config_file), "--inspect"]) == app.EXIT_HALTED
        out = capsys.readouterr().out
        assert "State A" in out
        assert "Halts on: C0" in out
