from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm, run_all
from .config import DEFAULT_MAX_TIME, DEFAULT_QUANTUM, SimulationConfig
from .errors import SimulationError
from .gantt import build_rich_gantt, render_occupancy
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult
from .workload import DEFAULT_PROCESS_COUNT, generate_workload
from .workload_io import load_workload, save_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-sim",
        description="Event-driven CPU scheduling simulator (FCFS, SJF, SRTF, Priority, preemptive Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Trace every simulation event (debug logging).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    _add_workload_arguments(run_parser)
    _add_simulation_arguments(run_parser)
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the occupancy chart as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_arguments(compare_parser)
    _add_simulation_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--gantt",
        action="store_true",
        help="Also print the plain-text occupancy chart of every algorithm.",
    )

    generate_parser = subparsers.add_parser("generate", help="Write a random workload to a JSON file.")
    generate_parser.add_argument(
        "count",
        type=int,
        nargs="?",
        default=DEFAULT_PROCESS_COUNT,
        help=f"Number of processes (default: {DEFAULT_PROCESS_COUNT}).",
    )
    generate_parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    generate_parser.add_argument("--output", "-o", required=True, help="Destination .json file.")

    return parser


def _add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--random",
        "-r",
        type=int,
        metavar="N",
        help="Generate a random workload of N processes instead of reading a file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed used with --random.",
    )


def _add_simulation_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round robin (default: {DEFAULT_QUANTUM}; ignored by other algorithms).",
    )
    parser.add_argument(
        "--max-time",
        type=int,
        default=DEFAULT_MAX_TIME,
        help=f"Abort runs whose simulated time passes this horizon (default: {DEFAULT_MAX_TIME}).",
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _workload_from_args(args: argparse.Namespace) -> List[Process]:
    if args.workload is not None:
        return load_workload(Path(args.workload))
    return generate_workload(args.random, seed=args.seed)


def _config_from_args(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(quantum=args.quantum, max_time=args.max_time)


def _print_workload(processes: List[Process], console: Console) -> None:
    table = Table(title="Process list", box=box.SIMPLE_HEAVY)
    for h in ["PID", "Priority", "Arrival", "CPU burst", "I/O request", "I/O burst"]:
        table.add_column(h, justify="center" if h == "PID" else "right")

    for p in processes:
        table.add_row(
            f"P{p.pid}",
            str(p.priority),
            str(p.arrival_time),
            str(p.cpu_burst),
            str(p.io_request_time),
            str(p.io_burst),
        )

    console.print(table)


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_occupancy(result.occupancy), markup=False, highlight=False, soft_wrap=True)
    else:
        panel, time_marks = build_rich_gantt(result.occupancy)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "CPU",
        "I/O",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
        "Priority",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.cpu_burst),
            str(p.io_burst),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
            str(p.priority),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _print_comparison(results: dict, console: Console, gantt: bool = False) -> None:
    if gantt:
        for result in results.values():
            console.print(f"\n[bold]{result.algorithm}[/bold]")
            console.print(render_occupancy(result.occupancy), markup=False, highlight=False, soft_wrap=True)
        console.print()

    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for result in results.values():
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            processes = _workload_from_args(args)
            _print_workload(processes, console)
            result = run_algorithm(args.algorithm, processes, config=_config_from_args(args))
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            processes = _workload_from_args(args)
            _print_workload(processes, console)
            results = run_all(processes, args.algorithms, config=_config_from_args(args))
            _print_comparison(results, console, gantt=args.gantt)
            return 0

        if args.command == "generate":
            processes = generate_workload(args.count, seed=args.seed)
            path = save_workload(processes, args.output)
            console.print(f"Wrote {len(processes)} processes to [green]{path}[/green]")
            return 0
    except (ValueError, OSError, SimulationError) as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
