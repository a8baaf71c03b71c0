from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Tuple

from .models import IDLE, Process

logger = logging.getLogger(__name__)

DEFAULT_PROCESSES: Tuple[Process, ...] = (
    Process("P1", arrival_time=0, burst_time=4, priority=2),
    Process("P2", arrival_time=1, burst_time=3, priority=1),
    Process("P3", arrival_time=2, burst_time=6, priority=3),
)

DEMO_PROCESSES: Tuple[Process, ...] = (
    Process("P1", arrival_time=0, burst_time=7, priority=2),
    Process("P2", arrival_time=2, burst_time=4, priority=1),
    Process("P3", arrival_time=4, burst_time=1, priority=3),
    Process("P4", arrival_time=5, burst_time=4, priority=2),
)


def validate_process(process: Process) -> None:
    """
    Reject a process the scheduler cannot accept on its own merits.
    """
    if not process.pid or not process.pid.strip():
        raise ValueError("Process id must be a non-empty string")
    if process.pid == IDLE:
        raise ValueError(f"Process id {IDLE!r} is reserved for idle time")
    if process.arrival_time < 0:
        raise ValueError(f"Process {process.pid!r}: arrival time must be >= 0")
    if process.burst_time < 1:
        raise ValueError(f"Process {process.pid!r}: burst time must be >= 1")


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Validate a whole batch, including id uniqueness, and return it as a list.
    """
    seen: set[str] = set()
    result: List[Process] = []
    for p in processes:
        validate_process(p)
        if p.pid in seen:
            raise ValueError(f"Duplicate process id {p.pid!r}")
        seen.add(p.pid)
        result.append(p)
    return result


class ProcessSet:
    """
    Ordered, caller-owned collection of processes.

    Builds work on `snapshot()`, so edits made while a schedule is being
    built never reach it.
    """

    def __init__(self, processes: Iterable[Process] = ()) -> None:
        self._processes: List[Process] = validate_processes(processes)

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(self.snapshot())

    def __contains__(self, pid: object) -> bool:
        return any(p.pid == pid for p in self._processes)

    def add(self, process: Process) -> None:
        validate_process(process)
        if process.pid in self:
            raise ValueError(f"Process id {process.pid!r} already exists. Use a unique id.")
        self._processes.append(process)
        logger.debug("Added process %s", process)

    def remove(self, pid: str) -> None:
        before = len(self._processes)
        self._processes = [p for p in self._processes if p.pid != pid]
        if len(self._processes) == before:
            logger.debug("No process %r to remove", pid)

    def clear(self) -> None:
        self._processes = []

    def load_demo(self) -> None:
        self._processes = list(DEMO_PROCESSES)

    def snapshot(self) -> Tuple[Process, ...]:
        return tuple(self._processes)
