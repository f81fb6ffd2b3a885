from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.table import Table

from .engine import run_algorithm
from .errors import ArgumentsError, ConstructionError
from .gantt import build_rich_gantt
from .log import configure_logging, default_log_level
from .metrics import summarize, turnaround_times
from .models import RunResult
from .workload_io import load_bursts

logger = logging.getLogger(__name__)

MISSING_ARGUMENTS = "ERROR: Missing arguments"


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        raise ArgumentsError(message)


def _burst(value: str) -> int:
    try:
        burst = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid burst: {value!r}") from exc
    if burst < 0:
        raise argparse.ArgumentTypeError(f"burst must be non-negative: {value}")
    return burst


def _quantum(value: str) -> int:
    try:
        quantum = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid quantum: {value!r}") from exc
    if quantum <= 0:
        raise argparse.ArgumentTypeError(f"quantum must be positive: {value}")
    return quantum


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="pcb-scheduler",
        description="Simulate FCFS and Round Robin CPU scheduling over a set of CPU bursts.",
    )
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="JSON or CSV file with extra bursts, appended after any given on the command line.",
    )
    parser.add_argument(
        "--gantt",
        action="store_true",
        help="Show a Gantt chart of the run.",
    )
    parser.add_argument(
        "--details",
        action="store_true",
        help="Show per-process and summary metric tables.",
    )
    parser.add_argument(
        "--log-level",
        default=default_log_level(),
        help="Logging level (default: $PCB_SCHEDULER_LOG_LEVEL or WARNING).",
    )

    subparsers = parser.add_subparsers(dest="algorithm", required=True)

    fcfs_parser = subparsers.add_parser("fcfs", help="First-Come First-Served.")
    fcfs_parser.add_argument("bursts", nargs="*", type=_burst, help="CPU burst of each process.")

    rr_parser = subparsers.add_parser("rr", help="Round Robin with a fixed quantum.")
    rr_parser.add_argument("quantum", type=_quantum, help="Time quantum (positive integer).")
    rr_parser.add_argument("bursts", nargs="*", type=_burst, help="CPU burst of each process.")

    return parser


def _print_details(result: RunResult, console: Console) -> None:
    turnaround = turnaround_times(result)

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in ["PID", "Burst", "Wait", "Turnaround"]:
        proc_table.add_column(h, justify="center" if h == "PID" else "right")

    for p in result.table:
        proc_table.add_row(
            f"P{p.pid}",
            str(result.table.bursts[p.pid]),
            str(p.wait),
            str(turnaround[p.pid]),
        )

    console.print(proc_table)

    summary = summarize(result)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")
    sys_table.add_row("Elapsed time", str(summary["elapsed"]))
    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{summary['throughput']:.3f}")

    console.print(sys_table)


def _print_result(result: RunResult, console: Console, gantt: bool, details: bool) -> None:
    if result.quantum is None:
        console.print("Using FCFS")
    else:
        console.print(f"Using RR({result.quantum}).")
    console.print()

    for pid, burst in enumerate(result.table.bursts):
        console.print(f"Accepted P{pid}: Burst {burst}")

    if gantt:
        console.print()
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    if details:
        console.print()
        _print_details(result, console)

    console.print(f"Average wait time: {summarize(result)['avg_waiting']:.2f}")


def main(argv: List[str] | None = None) -> int:
    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ArgumentsError as exc:
        console.print(MISSING_ARGUMENTS)
        err_console.print(f"{parser.prog}: {exc}", style="dim", markup=False)
        return 1

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        console.print(MISSING_ARGUMENTS)
        err_console.print(f"{exc}", style="dim", markup=False)
        return 1

    bursts = list(args.bursts)
    if args.workload:
        try:
            bursts.extend(load_bursts(Path(args.workload)))
        except (OSError, ValueError) as exc:
            console.print(MISSING_ARGUMENTS)
            err_console.print(f"{exc}", style="dim", markup=False)
            return 1

    if not bursts:
        console.print(MISSING_ARGUMENTS)
        return 1

    quantum = getattr(args, "quantum", None)
    try:
        result = run_algorithm(args.algorithm, bursts, quantum=quantum)
    except ConstructionError as exc:
        logger.error("construction failed: %s", exc)
        err_console.print("Failed to initialize processes")
        return 1

    _print_result(result, console, gantt=args.gantt, details=args.details)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
