from __future__ import annotations

from typing import List, Sequence

from .models import IDLE, Segment


def expand_to_ticks(segments: Sequence[Segment]) -> List[str]:
    """
    Expand a segment list into one pid per time unit, from 0 to the end of
    the last segment.
    """
    if not segments:
        return []

    makespan = segments[-1].end
    ticks: List[str] = []
    for t in range(makespan):
        owner = IDLE
        for seg in segments:
            if seg.start <= t < seg.end:
                owner = seg.pid
                break
        ticks.append(owner)
    return ticks
