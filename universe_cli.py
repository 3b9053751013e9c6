"""
Living Universe CLI

Command-line front-end for the living universe engine. Validates and clamps
caller parameters, then runs the engine and prints the results.

Subcommands:
  - run: One universe: evolve, perturb t1 -> t0, observe, report
  - ensemble: Multiverse statistics over independent universes
  - scenarios: List the built-in scenario presets

Parameter sources, later wins:
  scenario preset -> --config file (JSON/YAML) -> individual flags
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from receipts import StopRule, write_ledger_jsonl

from universe import (
    SCENARIOS,
    UniverseConfig,
    export_json,
    from_dict,
    generate_report,
    read_parameters,
    run_ensemble,
    run_universe,
    write_snapshot,
)
from universe.export import fmt

# Rich consoles for CLI output
console = Console()
err_console = Console(stderr=True)


_PARAMETER_FLAGS = (
    ("dim", int),
    ("model_type", str),
    ("system_type", str),
    ("steps", int),
    ("max_levels", int),
    ("t0", int),
    ("t1", int),
    ("strength", float),
    ("obs_level", int),
    ("count", int),
    ("alert_threshold", float),
)


def _add_parameter_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--scenario",
        choices=sorted(SCENARIOS),
        default="BASELINE",
        help="Preset to start from (default: BASELINE)",
    )
    parser.add_argument(
        "--config",
        help="JSON or YAML file with parameter overrides",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject out-of-range parameters instead of clamping them",
    )
    parser.add_argument(
        "--seed",
        type=int,
        dest="random_seed",
        help="Random generator seed (reproducible runs, open systems included)",
    )
    for name, kind in _PARAMETER_FLAGS:
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=kind)
    parser.add_argument(
        "--receipts",
        help="Append the receipt ledger to this JSONL file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of the text report",
    )


def print_success(message: str) -> None:
    """Print a success message with green checkmark."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message with red X to stderr."""
    err_console.print(f"[red]✗ error:[/red] {escape(message)}")


def resolve_config(args: argparse.Namespace) -> UniverseConfig:
    """Merge preset, config file and flags into one healed UniverseConfig."""
    params: Dict[str, Any] = SCENARIOS[args.scenario].to_dict()
    if args.config:
        params.update(read_parameters(args.config))
    for name, _ in _PARAMETER_FLAGS:
        value = getattr(args, name, None)
        if value is not None:
            params[name] = value
    if args.random_seed is not None:
        params["random_seed"] = args.random_seed
    return from_dict(params, strict=args.strict)


def _cmd_run(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    report = run_universe(config)
    ledger: List[dict] = list(report.receipts)

    if args.snapshot:
        ledger.append(write_snapshot(report, args.snapshot))

    if args.json:
        print(export_json(report))
    else:
        panel = Panel(
            escape(generate_report(report)),
            title=f"[bold]{escape(config.scenario_name)}[/bold]",
            border_style="red" if report.alert else "green",
        )
        console.print(panel)
        if args.snapshot:
            print_success(f"Snapshot written to {args.snapshot}")

    if args.receipts:
        count = write_ledger_jsonl(ledger, args.receipts)
        if not args.json:
            print_success(f"Appended {count} receipts to {args.receipts}")
    return 0


def _cmd_ensemble(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    result = run_ensemble(config)

    if args.json:
        print(json.dumps({
            "count": result.count,
            "mean_infinite": result.mean_infinite,
            "mean_delta": result.mean_delta,
            "var_infinite": result.var_infinite,
        }, indent=2))
    else:
        console.print(
            f"Multiverse mode: {result.count} universes sampled with "
            f"steps={config.steps}, levels={config.max_levels}."
        )
        table = Table(title="Multiverse Statistics")
        table.add_column("statistic", style="cyan", no_wrap=True)
        table.add_column("value", justify="right", style="magenta")
        table.add_row("Mean ||U_inf(t0)||", fmt(result.mean_infinite))
        table.add_row("Mean Delta ||U(t0)||", fmt(result.mean_delta))
        table.add_row("Var ||U_inf(t0)||", fmt(result.var_infinite))
        console.print(table)

    if args.receipts:
        write_ledger_jsonl([result.receipt], args.receipts)
    return 0


def _cmd_scenarios(args: argparse.Namespace) -> int:
    table = Table(title="Scenario Presets")
    table.add_column("scenario", style="cyan", no_wrap=True)
    table.add_column("model", style="green")
    table.add_column("system", style="yellow")
    table.add_column("dim", justify="right")
    table.add_column("steps", justify="right")
    table.add_column("levels", justify="right")

    for name in sorted(SCENARIOS):
        config = SCENARIOS[name]
        table.add_row(
            name,
            config.model_type,
            config.system_type,
            str(config.dim),
            str(config.steps),
            str(config.max_levels),
        )

    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="universe-sim",
        description="Living Universe simulation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  universe-sim run                                   # Baseline universe
  universe-sim run --model-type ising --dim 16       # Mean-field spins
  universe-sim run --snapshot universe-snapshot.txt  # Save a text snapshot
  universe-sim ensemble --count 25 --seed 42         # Multiverse statistics
  universe-sim run --config params.yaml --strict
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run one universe and report")
    _add_parameter_flags(run_parser)
    run_parser.add_argument(
        "--snapshot",
        help="Write a plain-text snapshot to this path",
    )

    ensemble_parser = subparsers.add_parser("ensemble", help="Multiverse statistics")
    _add_parameter_flags(ensemble_parser)

    subparsers.add_parser("scenarios", help="List scenario presets")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handlers = {
        "run": _cmd_run,
        "ensemble": _cmd_ensemble,
        "scenarios": _cmd_scenarios,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (StopRule, ValueError, FileNotFoundError) as exc:
        print_error(str(exc))
        return 2


if __name__ == "__main__":
    sys.exit(main())
