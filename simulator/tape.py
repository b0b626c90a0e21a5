import numpy as np

from simulator.errors import ResourceExhausted

BLANK = 0


class Tape:
    """
    Bi-infinite tape backed by a growable numpy array.

    Index 0 is materialized from the start; the window [min_index, max_index]
    only ever grows, to cover every index that has been written. Anything
    outside the window reads as blank.
    """

    def __init__(self, blank=BLANK, max_cells=None, initial_capacity=64):
        if max_cells is not None and max_cells < 1:
            raise ValueError(f"max_cells must be at least 1, got {max_cells}")
        self.blank = blank
        self.max_cells = max_cells
        capacity = max(int(initial_capacity), 1)
        self._cells = np.full(capacity, blank, dtype=np.int64)
        self._origin = capacity // 2  # array position of tape index 0
        self._lo = 0
        self._hi = 0

    @classmethod
    def from_cells(cls, lo, cells, blank=BLANK, max_cells=None):
        """Tape whose cells starting at index ``lo`` hold ``cells``."""
        cells = np.asarray(cells, dtype=np.int64)
        hi = lo + len(cells) - 1
        start, stop = min(lo, 0), max(hi, 0)
        tape = cls(blank, max_cells, initial_capacity=1)
        tape._cells = np.full(stop - start + 1, blank, dtype=np.int64)
        tape._origin = -start
        tape._cells[lo - start:hi - start + 1] = cells
        tape._lo, tape._hi = start, stop
        return tape

    def __len__(self):
        return self._hi - self._lo + 1

    def read(self, index):
        if index < self._lo or index > self._hi:
            return self.blank
        return int(self._cells[index + self._origin])

    def write(self, index, symbol):
        lo = min(self._lo, index)
        hi = max(self._hi, index)
        if self.max_cells is not None and hi - lo + 1 > self.max_cells:
            raise ResourceExhausted(
                "tape_cells",
                self.max_cells,
                f"Writing index {index} would grow the tape past {self.max_cells:,} cells",
            )
        self._reserve(index)
        self._cells[index + self._origin] = symbol
        self._lo, self._hi = lo, hi

    def window(self):
        return self._lo, self._hi

    def cells(self, lo=None, hi=None):
        """Copy of the symbols over [lo, hi], blank-filled outside the window."""
        lo = self._lo if lo is None else lo
        hi = self._hi if hi is None else hi
        out = np.full(max(hi - lo + 1, 0), self.blank, dtype=self._cells.dtype)
        start, stop = max(lo, self._lo), min(hi, self._hi)
        if start <= stop:
            out[start - lo:stop - lo + 1] = self._cells[start + self._origin:stop + self._origin + 1]
        return out

    def _reserve(self, index):
        """Grow the backing array so that ``index`` has a slot."""
        pos = index + self._origin
        size = len(self._cells)
        if 0 <= pos < size:
            return
        if pos < 0:
            extra = max(size, -pos)
            padding = np.full(extra, self.blank, dtype=self._cells.dtype)
            self._cells = np.concatenate((padding, self._cells))
            self._origin += extra
        else:
            extra = max(size, pos - size + 1)
            padding = np.full(extra, self.blank, dtype=self._cells.dtype)
            self._cells = np.concatenate((self._cells, padding))
