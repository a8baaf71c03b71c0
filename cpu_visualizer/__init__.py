"""
CPU scheduling visualizer package.

Simulates FCFS, SJF, Priority and Round Robin scheduling over a fixed set of
processes and renders the resulting timeline and metrics in the terminal.
"""

from .models import IDLE, Metrics, Process, Segment, SimulationResult
from .simulator import build_schedule

__all__ = [
    "IDLE",
    "Metrics",
    "Process",
    "Segment",
    "SimulationResult",
    "build_schedule",
]
