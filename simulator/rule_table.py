import operator
from collections import namedtuple
from enum import IntEnum

import numpy as np

from simulator.errors import MalformedTable, UndefinedTransition

HALTED = -1


class Move(IntEnum):
    """
    Direction the tape slides under the head.

    The head stays put on screen while the tape moves, so LEFT increments the
    head's tape index and RIGHT decrements it.
    """
    LEFT = 0
    RIGHT = 1

    @property
    def offset(self):
        return 1 if self is Move.LEFT else -1


Transition = namedtuple("Transition", ["write", "move", "next_state"])

# Row format: [state_id, write, move, next] repeated per symbol (0, 1).
EXAMPLE_RULES = [
    [0, 1, 1, 1, 1, 0, 1],
    [1, 1, 0, 0, 0, 0, 2],
    [2, 1, 1, -1, 1, 0, 3],
    [3, 1, 1, 3, 0, 1, 0],
]


def _as_int(value, what, row, symbol=None):
    if isinstance(value, bool):
        raise MalformedTable(f"{what} must be an integer, got {value!r}", row, symbol)
    try:
        return operator.index(value)
    except TypeError:
        raise MalformedTable(f"{what} must be an integer, got {value!r}", row, symbol) from None


class RuleTable:
    """Validated, immutable (state, symbol) -> Transition mapping."""

    def __init__(self, rows):
        rows = [list(row) for row in rows]
        if not rows:
            raise MalformedTable("Rule table has no rows")
        num_symbols = len(rows[0])
        if num_symbols == 0:
            raise MalformedTable("Rule table rows must hold at least one transition", 0)

        num_states = len(rows)
        table = []
        for state, row in enumerate(rows):
            if len(row) != num_symbols:
                raise MalformedTable(
                    f"Expected {num_symbols} transitions, got {len(row)}", state
                )
            entries = []
            for symbol, triple in enumerate(row):
                entries.append(self._validate(triple, state, symbol, num_states, num_symbols))
            table.append(tuple(entries))

        self._rows = tuple(table)
        self.num_states = num_states
        self.num_symbols = num_symbols

    @staticmethod
    def _validate(triple, state, symbol, num_states, num_symbols):
        try:
            write, move, next_state = triple
        except (TypeError, ValueError):
            raise MalformedTable(
                f"Transition must be a (write, move, next_state) triple, got {triple!r}",
                state, symbol,
            ) from None

        write = _as_int(write, "write symbol", state, symbol)
        move = _as_int(move, "move", state, symbol)
        next_state = _as_int(next_state, "next state", state, symbol)

        if not 0 <= write < num_symbols:
            raise MalformedTable(
                f"Write symbol {write} outside alphabet [0, {num_symbols})", state, symbol
            )
        if move not in (Move.LEFT, Move.RIGHT):
            raise MalformedTable(f"Move must be 0 (left) or 1 (right), got {move}", state, symbol)
        if next_state != HALTED and not 0 <= next_state < num_states:
            raise MalformedTable(
                f"Next state {next_state} is neither {HALTED} (halt) nor one of rows 0..{num_states - 1}",
                state, symbol,
            )
        return Transition(write, Move(move), next_state)

    @classmethod
    def from_rows(cls, rows):
        """
        Build a table from flat rows: [state_id, w0, m0, n0, w1, m1, n1, ...].

        Every row must hold 1 + 3K integers for the same K, and state_id must
        equal the row's position.
        """
        rows = list(rows)
        if not rows:
            raise MalformedTable("Rule table has no rows")

        width = None
        triples = []
        for position, row in enumerate(rows):
            row = list(row)
            if len(row) < 4 or (len(row) - 1) % 3 != 0:
                raise MalformedTable(
                    f"Row must hold 1 + 3K integers, got {len(row)} values", position
                )
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise MalformedTable(
                    f"Row has {len(row)} values but row 0 has {width}", position
                )
            state_id = _as_int(row[0], "state id", position)
            if state_id != position:
                raise MalformedTable(f"State id {state_id} does not match its row position", position)
            triples.append([tuple(row[i:i + 3]) for i in range(1, len(row), 3)])

        return cls(triples)

    def __len__(self):
        return self.num_states

    def __eq__(self, other):
        if not isinstance(other, RuleTable):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self):
        return hash(self._rows)

    def __repr__(self):
        return f"RuleTable(states={self.num_states}, symbols={self.num_symbols})"

    def lookup(self, state, symbol):
        if not 0 <= state < self.num_states or not 0 <= symbol < self.num_symbols:
            raise UndefinedTransition(state, symbol)
        return self._rows[state][symbol]

    def rows(self):
        return self._rows

    def to_rows(self):
        """Inverse of from_rows."""
        flat = []
        for state, row in enumerate(self._rows):
            entry = [state]
            for transition in row:
                entry.extend((transition.write, int(transition.move), transition.next_state))
            flat.append(entry)
        return flat

    def to_array(self):
        """Dense (states * symbols, 3) int32 array, indexed by state * K + symbol."""
        arr = np.empty((self.num_states * self.num_symbols, 3), dtype=np.int32)
        for state, row in enumerate(self._rows):
            for symbol, transition in enumerate(row):
                arr[state * self.num_symbols + symbol] = (
                    transition.write, int(transition.move), transition.next_state
                )
        return arr

    def halting_transitions(self):
        """List of (state, symbol) pairs whose transition halts the machine."""
        return [
            (state, symbol)
            for state, row in enumerate(self._rows)
            for symbol, transition in enumerate(row)
            if transition.next_state == HALTED
        ]
