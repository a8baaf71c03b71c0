from __future__ import annotations

import logging
from typing import Iterable, Optional

from .algorithms import ALGORITHM_LABELS, ALGORITHMS, schedule_rr
from .metrics import compute_metrics, compute_process_metrics, compute_system_metrics
from .models import Process, SimulationResult
from .ticks import expand_to_ticks

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def build_schedule(
    processes: Iterable[Process],
    algorithm: str,
    quantum: Optional[int] = DEFAULT_QUANTUM,
) -> SimulationResult:
    """
    Run one scheduling policy and derive ticks and metrics from its segments.

    The process set is copied on entry. The quantum is only used by round
    robin and is clamped to at least 1.
    """
    name = algorithm.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{algorithm}' (choose from {', '.join(ALGORITHMS)})")

    snapshot = tuple(processes)
    q = None
    if name == "rr":
        q = max(1, DEFAULT_QUANTUM if quantum is None else quantum)
    result = SimulationResult(algorithm=ALGORITHM_LABELS[name], quantum=q)

    if not snapshot:
        logger.debug("Empty process set; nothing to schedule")
        result.system = compute_system_metrics(snapshot, [])
        return result

    if name == "rr":
        segments = schedule_rr(snapshot, q)
    else:
        segments = ALGORITHMS[name](snapshot)

    result.segments = segments
    result.ticks = expand_to_ticks(segments)
    result.metrics = compute_metrics(snapshot, segments)
    result.processes = compute_process_metrics(snapshot, segments)
    result.system = compute_system_metrics(snapshot, segments)

    logger.debug(
        "Built %s schedule: %d segments, makespan %d",
        result.algorithm,
        len(segments),
        result.makespan,
    )
    return result
