from rich.console import Console
from rich.text import Text

from tools.ruleset_inspect import state_label


def render_tape(source, head_index, radius=10):
    """
    Two-line view of the cells within ``radius`` of the head, with a caret
    under the head. ``source`` is anything with read(index): a machine or a
    Snapshot.
    """
    tape_line = Text()
    head_line = Text()
    for pos in range(head_index - radius, head_index + radius + 1):
        symbol = str(source.read(pos))
        if pos == head_index:
            tape_line.append(symbol, style="bold magenta")
            head_line.append("^", style="bold cyan")
        else:
            tape_line.append(symbol)
            head_line.append(" " * len(symbol))
        if pos != head_index + radius:
            tape_line.append(" ")
            head_line.append(" ")
    return tape_line, head_line


class ConsoleRenderer:
    """Prints a tape view after every step it is handed."""

    def __init__(self, machine, radius=10, console=None):
        self.machine = machine
        self.radius = radius
        self.console = console or Console()

    def __call__(self, result):
        self.render(result)

    def render(self, result):
        tape_line, head_line = render_tape(self.machine, result.head_index, self.radius)
        self.console.print(tape_line)
        self.console.print(head_line)
        move = "-" if result.move is None else result.move.name
        self.console.print(
            f"Step {result.step}: wrote {result.written_symbol}, moved {move}, "
            f"state {state_label(result.state)}",
            highlight=False,
        )

    def render_initial(self):
        tape_line, head_line = render_tape(self.machine, self.machine.head_index, self.radius)
        self.console.print(tape_line)
        self.console.print(head_line)
        self.console.print(f"Step 0: state {state_label(self.machine.current_state)}", highlight=False)
