class MachineError(Exception):
    """Base class for every error raised by the tape engine."""


class MalformedTable(MachineError, ValueError):
    """A rule table failed validation at construction time."""

    def __init__(self, message, row=None, symbol=None):
        self.row = row
        self.symbol = symbol
        location = ""
        if row is not None:
            location = f"row {row}"
            if symbol is not None:
                location += f", symbol {symbol}"
            location = f" ({location})"
        super().__init__(f"{message}{location}")


class UndefinedTransition(MachineError, LookupError):
    """No transition exists for a (state, symbol) pair."""

    def __init__(self, state, symbol, head_index=None):
        self.state = state
        self.symbol = symbol
        self.head_index = head_index
        message = f"No transition for state {state}, symbol {symbol}"
        if head_index is not None:
            message += f" at head index {head_index}"
        super().__init__(message)

    def at(self, head_index):
        """Return a copy of this error carrying the head position."""
        return UndefinedTransition(self.state, self.symbol, head_index)


class ResourceExhausted(MachineError):
    """A step budget or tape ceiling was reached before the machine halted."""

    def __init__(self, kind, limit, message=None):
        self.kind = kind
        self.limit = limit
        super().__init__(message or f"Exceeded {kind} limit of {limit:,}")
