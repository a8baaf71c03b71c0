from __future__ import annotations

import argparse
import logging
import time
from typing import List, Sequence

from rich import box
from rich.console import Console, Group
from rich.live import Live
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from .algorithms import ALGORITHMS
from .gantt import build_legend, build_rich_gantt, color_for_pid
from .models import IDLE, Process, SimulationResult
from .playback import Playback, clamp_delay
from .process_set import DEMO_PROCESSES
from .simulator import DEFAULT_QUANTUM, build_schedule
from .workload_io import dump_result, load_workload

DEFAULT_STEP_DELAY = 0.2

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpu-visualizer",
        description="CPU scheduling visualizer (FCFS, SJF, Priority, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Build a schedule for a workload and show it.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    _add_workload_arguments(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round robin, clamped to at least 1 (default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Play the schedule back tick by tick before the summary.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds per tick when --step is used (default: {DEFAULT_STEP_DELAY}, minimum 0.05).",
    )
    run_parser.add_argument(
        "--json",
        dest="json_path",
        default=None,
        help="Also write segments, ticks and metrics to this JSON file.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    _add_workload_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for round robin (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--demo",
        action="store_true",
        help="Use the built-in four-process demo workload.",
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _load_processes(args: argparse.Namespace) -> List[Process]:
    if args.demo:
        return list(DEMO_PROCESSES)
    return load_workload(args.workload)


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.segments)
    console.print(panel)
    if time_marks:
        console.print(time_marks)
    console.print(build_legend([seg.pid for seg in result.segments]))

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Finish",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            Text(p.pid, style=color_for_pid(p.pid)),
            str(p.arrival_time),
            str(p.burst_time),
            "" if p.priority is None else str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    sys_table = Table(title="Metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{result.metrics.average_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{result.metrics.average_turnaround:.2f}")
    sys_table.add_row("Total time (makespan)", str(result.makespan))
    if result.system:
        sys = result.system
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Time-stepped playback of the computed ticks.
    """
    if not result.ticks:
        console.print("[red]No execution to animate.[/red]")
        return

    delay = clamp_delay(delay)
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {result.makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    playback = Playback(result.ticks)
    with Live(console=console, auto_refresh=False) as live:
        while not playback.finished:
            pid = playback.now_running
            label = "[idle]" if pid == IDLE else pid
            panel, _ = build_rich_gantt(result.segments, cursor=playback.current_time)
            status = Text(f"t={playback.current_time}  Now running: ")
            status.append(label, style=f"bold {color_for_pid(pid)}")
            live.update(Group(panel, status), refresh=True)
            playback.step()
            time.sleep(delay)


def _run(args: argparse.Namespace, console: Console) -> int:
    processes = _load_processes(args)
    result = build_schedule(processes, args.algorithm, quantum=args.quantum)
    if args.step:
        try:
            _animate_result(result, delay=args.step_delay, console=console)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_result(result, console)
    if args.json_path:
        path = dump_result(result, args.json_path)
        console.print(f"[dim]Result written to {path}[/dim]")
    return 0


def _compare(args: argparse.Namespace, console: Console) -> int:
    processes = _load_processes(args)

    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for alg in args.algorithms:
        result = build_schedule(processes, alg, quantum=args.quantum)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{result.metrics.average_waiting:.2f}",
            f"{result.metrics.average_turnaround:.2f}",
            str(result.makespan),
        )

    console.print(summary_table)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            return _run(args, console)
        if args.command == "compare":
            return _compare(args, console)
    except (ValueError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
