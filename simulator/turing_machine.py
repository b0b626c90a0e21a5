from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from simulator.errors import MachineError, ResourceExhausted, UndefinedTransition
from simulator.extractor import DEFAULT_MARGIN, extract_result
from simulator.rule_table import HALTED, Move, RuleTable
from simulator.tape import BLANK, Tape


class RunStatus(Enum):
    CONTINUING = "continuing"
    HALTED = "halted"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step, as seen after the step was applied."""
    status: RunStatus
    head_index: int
    written_symbol: Optional[int]
    move: Optional[Move]
    state: int
    step: int
    read_symbol: Optional[int] = None

    @property
    def halted(self):
        return self.status is RunStatus.HALTED

    def to_dict(self):
        return {
            "step": self.step,
            "status": self.status.value,
            "state": self.state,
            "head_index": self.head_index,
            "read_symbol": self.read_symbol,
            "written_symbol": self.written_symbol,
            "move": None if self.move is None else self.move.name,
        }


@dataclass(frozen=True)
class Snapshot:
    """Frozen copy of a machine configuration, safe to hand to another thread."""
    head_index: int
    state: int
    steps: int
    lo: int
    hi: int
    cells: np.ndarray

    def read(self, index):
        if index < self.lo or index > self.hi:
            return BLANK
        return int(self.cells[index - self.lo])


class TuringMachine:
    def __init__(self, rules, max_tape_cells=None):
        if not isinstance(rules, RuleTable):
            rules = RuleTable.from_rows(rules)
        self.rules = rules
        self.max_tape_cells = max_tape_cells
        self.reset()

    def reset(self):
        self.tape = Tape(max_cells=self.max_tape_cells)
        self.head_index = 0
        self.current_state = 0
        self.steps = 0

    def is_halted(self):
        return self.current_state == HALTED

    def read(self, index):
        return self.tape.read(index)

    def window(self):
        return self.tape.window()

    def step(self):
        """
        Apply one read/lookup/write/move/transition cycle.

        The lookup and the tape ceiling check both happen before anything is
        mutated, so a failing step leaves the machine exactly as it was.
        Stepping a halted machine changes nothing.
        """
        if self.is_halted():
            return StepResult(
                status=RunStatus.HALTED,
                head_index=self.head_index,
                written_symbol=None,
                move=None,
                state=self.current_state,
                step=self.steps,
            )

        symbol = self.tape.read(self.head_index)
        try:
            transition = self.rules.lookup(self.current_state, symbol)
        except UndefinedTransition as exc:
            raise exc.at(self.head_index) from exc

        self.tape.write(self.head_index, transition.write)
        self.head_index += transition.move.offset
        self.current_state = transition.next_state
        self.steps += 1

        return StepResult(
            status=RunStatus.HALTED if self.is_halted() else RunStatus.CONTINUING,
            head_index=self.head_index,
            written_symbol=transition.write,
            move=transition.move,
            state=self.current_state,
            step=self.steps,
            read_symbol=symbol,
        )

    def run(self, max_steps=None, on_step=None):
        """
        Step until the machine halts and return the number of steps taken.

        Raises ResourceExhausted once ``max_steps`` steps have run without a
        halt; the machine is left runnable.
        """
        taken = 0
        while not self.is_halted():
            if max_steps is not None and taken >= max_steps:
                raise ResourceExhausted("steps", max_steps)
            result = self.step()
            taken += 1
            if on_step is not None:
                on_step(result)
        return taken

    def extract_result(self, margin=DEFAULT_MARGIN):
        if not self.is_halted():
            raise MachineError("Cannot extract the result of a machine that has not halted")
        return extract_result(self.tape, margin)

    def snapshot(self):
        lo, hi = self.tape.window()
        cells = self.tape.cells(lo, hi)
        cells.setflags(write=False)
        return Snapshot(
            head_index=self.head_index,
            state=self.current_state,
            steps=self.steps,
            lo=lo,
            hi=hi,
            cells=cells,
        )
