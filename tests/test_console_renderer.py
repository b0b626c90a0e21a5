"""Tests for the text tape renderer."""

from __future__ import annotations

import io

from rich.console import Console

from simulator.turing_machine import TuringMachine
from tools.console_renderer import ConsoleRenderer, render_tape


def _console():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestRenderTape:
    def test_blank_tape(self, example_machine: TuringMachine) -> None:
        tape_line, head_line = render_tape(example_machine, 0, radius=2)
        assert tape_line.plain == "0 0 0 0 0"
        assert head_line.plain == "    ^    "

    def test_marks_written_cells(self, example_machine: TuringMachine) -> None:
        example_machine.step()
        tape_line, head_line = render_tape(example_machine, example_machine.head_index, radius=1)
        assert tape_line.plain == "0 0 1"
        assert head_line.plain == "  ^  "

    def test_renders_from_snapshot(self, example_machine: TuringMachine) -> None:
        example_machine.step()
        snap = example_machine.snapshot()
        example_machine.run()
        tape_line, _ = render_tape(snap, snap.head_index, radius=1)
        assert tape_line.plain == "0 0 1"


class TestConsoleRenderer:
    def test_prints_each_step(self, example_machine: TuringMachine) -> None:
        console = _console()
        renderer = ConsoleRenderer(example_machine, radius=2, console=console)
        renderer.render_initial()
        example_machine.run(max_steps=200, on_step=renderer)
        output = console.file.getvalue()
        assert "Step 0: state A" in output
        assert "Step 1: wrote 1, moved RIGHT, state B" in output
        assert "Step 107: wrote 1, moved RIGHT, state HALT" in output
