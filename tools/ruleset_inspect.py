import argparse

from rich.console import Console
from rich.table import Table

from simulator.rule_table import EXAMPLE_RULES, HALTED, RuleTable
from tools.ruleset_io import hash_ruleset, load_rules

console = Console()


def state_label(state):
    if state == HALTED:
        return "HALT"
    if state < 26:
        return chr(ord('A') + state)
    return f"S{state}"


def format_transition(transition):
    """Compact Busy Beaver notation, e.g. 1RB; halting entries end in HALT."""
    return f"{transition.write}{transition.move.name[0]}{state_label(transition.next_state)}"


def build_rule_table_view(table, title="Transition Table"):
    view = Table(title=title)
    view.add_column("State")
    for symbol in range(table.num_symbols):
        view.add_column(str(symbol), justify="center")
    for state, row in enumerate(table.rows()):
        view.add_row(f"State {state_label(state)}", *(format_transition(t) for t in row))
    return view


def latex_table(table):
    lines = [r"\begin{array}{c|" + "c" * table.num_symbols + "}"]
    lines.append(
        "State/Symbol & "
        + " & ".join(f"\\text{{{i}}}" for i in range(table.num_symbols))
        + r" \\ \hline"
    )
    for state, row in enumerate(table.rows()):
        lines.append(" & ".join([state_label(state)] + [format_transition(t) for t in row]) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def pretty_print_ruleset(table, show_latex=False):
    """Print the table as a state x symbol grid, optionally with a LaTeX copy."""
    console.print(f"[INFO] {table.num_states} states, {table.num_symbols} symbols")
    console.print(f"  Ruleset Hash: {hash_ruleset(table)}")
    console.print(build_rule_table_view(table))
    halts = table.halting_transitions()
    if halts:
        entries = ", ".join(f"{state_label(state)}{symbol}" for state, symbol in halts)
        console.print(f"  Halts on: {entries}", highlight=False)
    else:
        console.print("[yellow]  No halting transition: this table can never halt.[/yellow]")
    if show_latex:
        console.print("\n=== LaTeX Table ===")
        console.print(latex_table(table), markup=False, highlight=False)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Rule Table Inspector")
    parser.add_argument("--rules", help="Rule file to inspect (default: built-in example)")
    parser.add_argument("--latex", action="store_true", help="Also print a LaTeX array")
    args = parser.parse_args(argv)

    table = load_rules(args.rules) if args.rules else RuleTable.from_rows(EXAMPLE_RULES)
    pretty_print_ruleset(table, show_latex=args.latex)


if __name__ == "__main__":
    main()
