from __future__ import annotations

from typing import Iterable, List, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import IDLE, Segment

PALETTE = [
    "blue",
    "green",
    "yellow",
    "red",
    "magenta",
    "cyan",
    "bright_green",
    "bright_magenta",
    "purple",
    "dark_cyan",
    "dark_orange",
    "spring_green3",
    "deep_pink3",
    "deep_sky_blue1",
    "chartreuse4",
]
IDLE_COLOR = "grey50"


def color_for_pid(pid: str) -> str:
    """
    Stable colour for a pid, independent of the order pids are drawn in.
    """
    if pid == IDLE:
        return IDLE_COLOR

    h = 0
    for ch in pid:
        # 32-bit signed string hash
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return PALETTE[abs(h) % len(PALETTE)]


def build_rich_gantt(segments: List[Segment], cursor: Optional[int] = None) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a coloured Gantt chart and a string with
    time marks. When `cursor` is given, a marker row points at that tick.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    timeline = Text()
    labels = Text()
    time_marks = "0"

    for seg in segments:
        width = max(1, seg.duration)
        label = "" if seg.is_idle else seg.pid[:width]

        timeline.append(" " * width, style=f"on {color_for_pid(seg.pid)}")
        labels.append(label.ljust(width), style="bold")
        time_marks += f"{seg.end:>{width}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)
    if cursor is not None:
        marker = Text(" " * min(cursor, segments[-1].end) + "^", style="bold red")
        table.add_row(marker)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks


def build_legend(pids: Iterable[str]) -> Table:
    legend = Table.grid(padding=(0, 2))
    cells = []
    for pid in dict.fromkeys(pids):
        cell = Text()
        cell.append("  ", style=f"on {color_for_pid(pid)}")
        cell.append(f" {pid}")
        cells.append(cell)
    if cells:
        legend.add_row(*cells)
    return legend
