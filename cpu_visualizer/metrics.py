from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence

from .models import Metrics, Process, ProcessMetrics, Segment, SystemMetrics

_TWO_PLACES = Decimal("0.01")


def average(total: int, count: int) -> float:
    """
    Mean of `total` over `count`, rounded half-up to 2 decimals.

    A count of zero is treated as one.
    """
    quotient = Decimal(total) / Decimal(max(count, 1))
    return float(quotient.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def finish_times(segments: Sequence[Segment]) -> Dict[str, int]:
    finish: Dict[str, int] = {}
    for seg in segments:
        if seg.is_idle:
            continue
        finish[seg.pid] = max(finish.get(seg.pid, 0), seg.end)
    return finish


def compute_metrics(processes: Sequence[Process], segments: Sequence[Segment]) -> Metrics:
    """
    Average waiting and turnaround time across all processes.

    A process's finish time is the end of its last segment (0 if it never
    ran). Turnaround is finish minus arrival; waiting is turnaround minus
    burst.
    """
    finish = finish_times(segments)

    total_waiting = 0
    total_turnaround = 0
    for p in processes:
        turnaround = finish.get(p.pid, 0) - p.arrival_time
        total_turnaround += turnaround
        total_waiting += turnaround - p.burst_time

    n = len(processes)
    return Metrics(
        average_waiting=average(total_waiting, n),
        average_turnaround=average(total_turnaround, n),
    )


def compute_process_metrics(
    processes: Sequence[Process], segments: Sequence[Segment]
) -> List[ProcessMetrics]:
    """
    Per-process rows in input order.
    """
    finish = finish_times(segments)
    first_start: Dict[str, int] = {}
    for seg in segments:
        if not seg.is_idle and seg.pid not in first_start:
            first_start[seg.pid] = seg.start

    rows: List[ProcessMetrics] = []
    for p in processes:
        completion_time = finish.get(p.pid, 0)
        start_time = first_start.get(p.pid, 0)
        turnaround_time = completion_time - p.arrival_time
        rows.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=start_time - p.arrival_time,
                priority=p.priority,
            )
        )
    return rows


def compute_system_metrics(processes: Sequence[Process], segments: Sequence[Segment]) -> SystemMetrics:
    """
    Compute throughput and CPU utilization over the whole timeline.
    """
    if not segments:
        return SystemMetrics(makespan=0, cpu_busy_time=0, throughput=0.0, cpu_utilization=0.0)

    makespan = segments[-1].end
    cpu_busy_time = sum(seg.duration for seg in segments if not seg.is_idle)

    throughput = len(processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    return SystemMetrics(
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
