from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice


def _label(sl: ScheduledSlice) -> str:
    return f"P{sl.pid}"


def _cell_width(sl: ScheduledSlice) -> int:
    # widened past the slice length so labels and time marks never run together
    return max(sl.end_time - sl.start_time, len(_label(sl)) + 1, len(str(sl.end_time)) + 1)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart, one cell per slice, with the end time of each
    slice right-aligned under its cell.
    """
    if not slices:
        return "(no execution)"

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    line = "|"
    labels = " "
    time_marks = "0"

    for sl in slices:
        width = _cell_width(sl)
        line += "=" * width
        labels += _label(sl).ljust(width)
        time_marks += f"{sl.end_time:>{width}}"

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, time_marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = colors[len(pid_to_color) % len(colors)]
        return pid_to_color[pid]

    # leading column lines up with the "0" time mark
    timeline = Text(" ")
    labels = Text(" ")
    time_marks = "0"

    for sl in slices:
        width = _cell_width(sl)
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(_label(sl).ljust(width), style="bold")
        time_marks += f"{sl.end_time:>{width}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
