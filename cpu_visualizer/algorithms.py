from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, List, Tuple

from .models import IDLE, Process, Segment

# A process paired with its position in the caller's input.
_Entry = Tuple[int, Process]


def check_processes(processes: Iterable[Process]) -> List[_Entry]:
    """
    Copy the input into (position, process) entries, stably sorted by arrival.

    Fails fast on values no schedule can be built from. Duplicate ids are not
    checked here; that belongs to whoever accepts processes (see process_set).
    """
    entries = list(enumerate(processes))
    for _, p in entries:
        if p.arrival_time < 0:
            raise ValueError(f"Process {p.pid!r} has negative arrival time {p.arrival_time}")
        if p.burst_time < 1:
            raise ValueError(f"Process {p.pid!r} has non-positive burst time {p.burst_time}")
    entries.sort(key=lambda e: e[1].arrival_time)
    return entries


def schedule_fcfs(processes: Iterable[Process]) -> List[Segment]:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in arrival order, equal arrivals in input order. Gaps
    before a late arrival become IDLE segments.
    """
    time = 0
    segments: List[Segment] = []

    for _, p in check_processes(processes):
        if time < p.arrival_time:
            segments.append(Segment(pid=IDLE, start=time, end=p.arrival_time))
            time = p.arrival_time

        segments.append(Segment(pid=p.pid, start=time, end=time + p.burst_time))
        time += p.burst_time

    return segments


def _schedule_non_preemptive(
    processes: Iterable[Process],
    selection_key: Callable[[_Entry], tuple],
) -> List[Segment]:
    """
    Shared loop for SJF and Priority.

    Arrivals are moved from the pending list into the ready list as time
    advances; the ready entry with the smallest key runs to completion.
    An empty ready list jumps straight to the next arrival.
    """
    pending = check_processes(processes)
    ready: List[_Entry] = []
    segments: List[Segment] = []
    time = 0
    i = 0

    while i < len(pending) or ready:
        while i < len(pending) and pending[i][1].arrival_time <= time:
            ready.append(pending[i])
            i += 1

        if not ready:
            next_arrival = pending[i][1].arrival_time
            segments.append(Segment(pid=IDLE, start=time, end=next_arrival))
            time = next_arrival
            continue

        entry = min(ready, key=selection_key)
        ready.remove(entry)
        p = entry[1]

        segments.append(Segment(pid=p.pid, start=time, end=time + p.burst_time))
        time += p.burst_time

    return segments


def schedule_sjf(processes: Iterable[Process]) -> List[Segment]:
    """
    Shortest Job First (non-preemptive).

    Among arrived processes choose the smallest burst time; ties go to the
    earlier arrival, then to the earlier position in the input.
    """

    def sjf_key(entry: _Entry) -> tuple:
        index, p = entry
        return (p.burst_time, p.arrival_time, index)

    return _schedule_non_preemptive(processes, sjf_key)


def schedule_priority(processes: Iterable[Process]) -> List[Segment]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Ties are broken by
    earlier arrival, then shorter burst, then input position. A process
    without a priority ranks below every numbered one.
    """

    def priority_key(entry: _Entry) -> tuple:
        index, p = entry
        prio = p.priority if p.priority is not None else float("inf")
        return (prio, p.arrival_time, p.burst_time, index)

    return _schedule_non_preemptive(processes, priority_key)


def schedule_rr(processes: Iterable[Process], quantum: int) -> List[Segment]:
    """
    Round Robin scheduling with a fixed time quantum.

    After each slice, processes that arrived during it are enqueued before
    the preempted process goes back to the tail of the queue. Consecutive
    slices of the same process are kept as separate segments.
    """
    if quantum < 1:
        raise ValueError(f"Round Robin requires a positive quantum, got {quantum}")

    procs = check_processes(processes)
    # Remaining burst per sorted position, so duplicate ids cannot collide.
    remaining = {pos: p.burst_time for pos, (_, p) in enumerate(procs)}
    queue: deque[int] = deque()
    segments: List[Segment] = []
    time = 0
    i = 0

    def enqueue_arrivals(current_time: int) -> None:
        nonlocal i
        while i < len(procs) and procs[i][1].arrival_time <= current_time:
            queue.append(i)
            i += 1

    enqueue_arrivals(0)

    while queue or i < len(procs):
        if not queue:
            next_arrival = procs[i][1].arrival_time
            if time < next_arrival:
                segments.append(Segment(pid=IDLE, start=time, end=next_arrival))
            time = next_arrival
            enqueue_arrivals(time)
            continue

        pos = queue.popleft()
        p = procs[pos][1]
        run_time = min(quantum, remaining[pos])

        segments.append(Segment(pid=p.pid, start=time, end=time + run_time))
        time += run_time
        remaining[pos] -= run_time

        enqueue_arrivals(time)

        if remaining[pos] > 0:
            queue.append(pos)

    return segments


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}

ALGORITHM_LABELS = {
    "fcfs": "FCFS",
    "sjf": "SJF (non-preemptive)",
    "priority": "Priority (non-preemptive)",
    "rr": "Round Robin",
}
