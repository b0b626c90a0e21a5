from dataclasses import dataclass

DEFAULT_MARGIN = 3


@dataclass(frozen=True)
class ExtractedTape:
    """Final tape window: symbols over [lo, hi], marks padded by a blank margin."""
    lo: int
    hi: int
    symbols: tuple
    first_mark: int
    last_mark: int

    def __str__(self):
        return " ".join(str(symbol) for symbol in self.symbols)


def extract_result(tape, margin=DEFAULT_MARGIN):
    """
    Return the smallest window holding every non-blank cell, padded by
    ``margin`` blanks on each side, or None when the tape is entirely blank.

    The scan starts at the materialized window's edges and moves inward, so it
    never leaves the written region.
    """
    if margin < 0:
        raise ValueError(f"margin must be non-negative, got {margin}")

    min_index, max_index = tape.window()

    first = min_index
    while first <= max_index and tape.read(first) == tape.blank:
        first += 1
    if first > max_index:
        return None

    last = max_index
    while tape.read(last) == tape.blank:
        last -= 1

    lo, hi = first - margin, last + margin
    symbols = tuple(int(symbol) for symbol in tape.cells(lo, hi))
    return ExtractedTape(lo=lo, hi=hi, symbols=symbols, first_mark=first, last_mark=last)
