from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

# Reserved pid for CPU inactivity. Never accepted as a process id.
IDLE = "IDLE"


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None


@dataclass(frozen=True)
class Segment:
    """
    One contiguous stretch of the timeline owned by a process or by IDLE.
    """

    pid: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE


@dataclass(frozen=True)
class Metrics:
    average_waiting: float
    average_turnaround: float


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: Optional[int] = None


@dataclass
class SystemMetrics:
    makespan: int
    cpu_busy_time: int
    throughput: float
    cpu_utilization: float


@dataclass
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    segments: List[Segment] = field(default_factory=list)
    ticks: List[str] = field(default_factory=list)
    metrics: Metrics = field(default_factory=lambda: Metrics(0.0, 0.0))
    processes: List[ProcessMetrics] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    @property
    def makespan(self) -> int:
        return self.segments[-1].end if self.segments else 0
