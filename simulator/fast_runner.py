from dataclasses import dataclass
from typing import Optional

import numpy as np
from numba import njit

from simulator.rule_table import HALTED

# Kernel exit codes
_STOPPED = 0
_OUT_OF_TAPE = 1
_TAPE_FULL = 2

_NO_LIMIT = np.iinfo(np.int64).max


@dataclass(frozen=True)
class FastRunResult:
    steps: int
    halted: bool
    head_index: int
    lo: int
    hi: int
    cells: np.ndarray
    stopped_on: Optional[str] = None  # "steps" or "tape_cells" when not halted


@njit
def run_kernel(transitions, num_symbols, tape, head, state, max_steps, max_cells, lo, hi):
    """
    Run one machine over a fixed-size tape.

    Stops on halt, after max_steps steps, before a write that would stretch
    the written window past max_cells, or when the head walks off the array,
    in which case the host grows the tape and calls again.
    """
    size = tape.shape[0]
    steps = 0
    while steps < max_steps and state != -1:
        if head < 0 or head >= size:
            return head, state, steps, lo, hi, _OUT_OF_TAPE

        new_lo = min(lo, head)
        new_hi = max(hi, head)
        if new_hi - new_lo + 1 > max_cells:
            return head, state, steps, lo, hi, _TAPE_FULL

        symbol = tape[head]
        rule_idx = state * num_symbols + symbol

        # Write symbol
        tape[head] = transitions[rule_idx, 0]
        lo = new_lo
        hi = new_hi

        # Move head: 0 slides the tape left, so the index goes up
        if transitions[rule_idx, 1] == 0:
            head += 1
        else:
            head -= 1

        state = transitions[rule_idx, 2]
        steps += 1

    return head, state, steps, lo, hi, _STOPPED


def fast_forward(table, max_steps=None, initial_cells=512, max_cells=None):
    """
    Host-side driver for run_kernel: runs ``table`` from a blank tape until it
    halts, ``max_steps`` steps have been taken, or the written window would
    exceed ``max_cells``, doubling the tape whenever the head leaves it.
    Indices in the result are tape indices, not array positions.
    """
    transitions = table.to_array()
    size = max(int(initial_cells), 2)
    tape = np.zeros(size, dtype=np.int32)
    origin = size // 2
    head, state, lo, hi = origin, 0, origin, origin
    budget = _NO_LIMIT if max_steps is None else int(max_steps)
    ceiling = _NO_LIMIT if max_cells is None else int(max_cells)
    steps = 0

    while True:
        head, state, taken, lo, hi, status = run_kernel(
            transitions, table.num_symbols, tape, head, state, budget - steps, ceiling, lo, hi
        )
        steps += taken
        if status != _OUT_OF_TAPE:
            break

        # Re-center the old tape inside one twice its size
        shift = tape.shape[0] // 2
        grown = np.zeros(tape.shape[0] * 2, dtype=np.int32)
        grown[shift:shift + tape.shape[0]] = tape
        tape = grown
        head += shift
        lo += shift
        hi += shift
        origin += shift

    halted = int(state) == HALTED
    stopped_on = None
    if status == _TAPE_FULL:
        stopped_on = "tape_cells"
    elif not halted:
        stopped_on = "steps"

    return FastRunResult(
        steps=int(steps),
        halted=halted,
        head_index=int(head - origin),
        lo=int(lo - origin),
        hi=int(hi - origin),
        cells=tape[lo:hi + 1].copy(),
        stopped_on=stopped_on,
    )
