from __future__ import annotations

from typing import Optional, Sequence

MIN_STEP_DELAY = 0.05


class Playback:
    """
    Cursor over a computed tick sequence. Reads the ticks, never changes them.
    """

    def __init__(self, ticks: Sequence[str]) -> None:
        self._ticks = ticks
        self.current_time = 0

    @property
    def length(self) -> int:
        return len(self._ticks)

    @property
    def finished(self) -> bool:
        return self.current_time >= len(self._ticks)

    @property
    def now_running(self) -> Optional[str]:
        if self.finished:
            return None
        return self._ticks[self.current_time]

    def step(self) -> int:
        self.current_time = min(self.current_time + 1, len(self._ticks))
        return self.current_time

    def reset(self) -> None:
        self.current_time = 0


def clamp_delay(delay: float) -> float:
    return max(MIN_STEP_DELAY, delay)
