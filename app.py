# app.py

import argparse
import sys

from rich.console import Console

from config.config_loader import load_config
from logger.logger import JSONLogger
from simulator.errors import MachineError, ResourceExhausted
from simulator.extractor import extract_result
from simulator.fast_runner import fast_forward
from simulator.rule_table import EXAMPLE_RULES, RuleTable
from simulator.tape import Tape
from simulator.turing_machine import TuringMachine
from tools.console_renderer import ConsoleRenderer
from tools.ruleset_inspect import pretty_print_ruleset
from tools.ruleset_io import hash_ruleset, load_rules

console = Console()

EXIT_HALTED = 0
EXIT_ERROR = 1
EXIT_BUDGET = 2


# === Utilities ===
def load_table(config):
    if config["rules_file"]:
        return load_rules(config["rules_file"])
    return RuleTable.from_rows(EXAMPLE_RULES)


def print_final_configuration(result):
    if result is None:
        console.print("[yellow]Final configuration: tape is blank.[/yellow]")
        return
    console.print(f"Final configuration (cells {result.lo}..{result.hi}):")
    console.print(str(result), highlight=False)


# === Step-by-step mode ===
def run_stepwise(table, config, logger, trace=False):
    machine = TuringMachine(table, max_tape_cells=config["max_tape_cells"])
    renderer = ConsoleRenderer(machine, radius=config["trace_radius"], console=console) if trace else None
    step_log = [] if config["log_steps"] else None

    def on_step(result):
        if renderer is not None:
            renderer(result)
        if step_log is not None:
            step_log.append(result)

    if renderer is not None:
        renderer.render_initial()

    summary = {"ruleset_hash": hash_ruleset(table), "mode": "stepwise"}
    try:
        steps = machine.run(max_steps=config["max_steps"], on_step=on_step)
    except ResourceExhausted as exc:
        console.print(f"[yellow][STOPPED] {exc} (state {machine.current_state}, head {machine.head_index})[/yellow]")
        logger.log_run({**summary, "halted": False, "steps": machine.steps, "stopped_on": exc.kind,
                        "limit": exc.limit, "head_index": machine.head_index})
        return EXIT_BUDGET
    except MachineError as exc:
        console.print(f"[red][ERROR] {exc}[/red]")
        logger.log_failure({**summary, "error": type(exc).__name__, "message": str(exc),
                            "steps": machine.steps, "state": machine.current_state,
                            "head_index": machine.head_index})
        return EXIT_ERROR
    finally:
        if step_log:
            logger.log_steps(step_log)

    result = machine.extract_result(margin=config["result_margin"])
    console.print(f"[green][INFO] Halted after {steps:,} steps, head at {machine.head_index}.[/green]")
    print_final_configuration(result)
    logger.log_run({**summary, "halted": True, "steps": steps, "head_index": machine.head_index,
                    "window": list(machine.window()),
                    "result": None if result is None else list(result.symbols)})
    return EXIT_HALTED


# === Fast-forward mode ===
def run_fast(table, config, logger):
    summary = {"ruleset_hash": hash_ruleset(table), "mode": "fast"}
    outcome = fast_forward(table, max_steps=config["max_steps"], max_cells=config["max_tape_cells"])
    if not outcome.halted:
        limit = config["max_tape_cells"] if outcome.stopped_on == "tape_cells" else config["max_steps"]
        exc = ResourceExhausted(outcome.stopped_on, limit)
        console.print(f"[yellow][STOPPED] {exc} (head {outcome.head_index})[/yellow]")
        logger.log_run({**summary, "halted": False, "steps": outcome.steps, "stopped_on": exc.kind,
                        "limit": exc.limit, "head_index": outcome.head_index})
        return EXIT_BUDGET

    result = extract_result(Tape.from_cells(outcome.lo, outcome.cells), config["result_margin"])
    console.print(f"[green][INFO] Halted after {outcome.steps:,} steps, head at {outcome.head_index}.[/green]")
    print_final_configuration(result)
    logger.log_run({**summary, "halted": True, "steps": outcome.steps, "head_index": outcome.head_index,
                    "window": [outcome.lo, outcome.hi],
                    "result": None if result is None else list(result.symbols)})
    return EXIT_HALTED


def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Machine Tape Simulator")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    parser.add_argument("--rules", help="Rule table JSON file (default: built-in example)")
    parser.add_argument("--max-steps", type=int, help="Stop after this many steps without a halt")
    parser.add_argument("--margin", type=int, help="Blank cells shown around the final configuration")
    parser.add_argument("--trace", action="store_true", help="Print the tape after every step")
    parser.add_argument("--fast", action="store_true", help="Use the compiled fast-forward runner")
    parser.add_argument("--inspect", action="store_true", help="Print the rule table and exit")
    args = parser.parse_args(argv)

    if args.trace and args.fast:
        parser.error("--trace and --fast cannot be combined.")

    try:
        config = load_config(args.config, overrides={
            "rules_file": args.rules,
            "max_steps": args.max_steps,
            "result_margin": args.margin,
        })
        table = load_table(config)
    except (FileNotFoundError, ValueError, TypeError) as exc:
        console.print(f"[red][ERROR] {exc}[/red]")
        return EXIT_ERROR

    if args.inspect:
        pretty_print_ruleset(table)
        return EXIT_HALTED

    logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
    if args.fast:
        return run_fast(table, config, logger)
    return run_stepwise(table, config, logger, trace=args.trace)


if __name__ == "__main__":
    sys.exit(main())
