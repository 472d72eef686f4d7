from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import OccupancySlot, ScheduledSlice

CELL_WIDTH = 9


def occupancy_to_slices(occupancy: Sequence[OccupancySlot]) -> List[ScheduledSlice]:
    """
    Collapse consecutive units run by the same process into slices.
    """
    slices: List[ScheduledSlice] = []
    for slot in occupancy:
        if slot.idle:
            continue
        last = slices[-1] if slices else None
        if last is not None and last.pid == slot.pid and last.end_time == slot.time:
            last.end_time = slot.time + 1
        else:
            slices.append(ScheduledSlice(pid=slot.pid, start_time=slot.time, end_time=slot.time + 1))
    return slices


def render_occupancy(occupancy: Sequence[OccupancySlot], width: int = CELL_WIDTH) -> str:
    """
    Plain-text chart with one cell per time unit: ``Idle``, ``P3`` or
    ``P3(I/O)`` for the last unit before an I/O request.
    """
    if not occupancy:
        return "(no execution)"

    times = "Time :" + "".join(f"{slot.time:<{width + 1}}" for slot in occupancy) + str(len(occupancy))
    ruler = "      " + "-" * (len(occupancy) * (width + 1) + 1)
    cells = "PID  :|" + "|".join(f"{slot.label:^{width}}" for slot in occupancy) + "|"

    return "\n".join(["Gantt Chart:", times, ruler, cells])


def build_rich_gantt(occupancy: Sequence[OccupancySlot]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    Each time unit is one three-character cell. The unit right before a
    process blocks for I/O is marked with ``!``.
    """
    if not occupancy:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    for slot in occupancy:
        if slot.idle:
            timeline.append(" . ", style="dim")
            labels.append("   ")
            continue
        color = pid_color(slot.pid)
        marker = " ! " if slot.io_request else "   "
        timeline.append(marker, style=f"bold white on {color}")
        labels.append(f"P{slot.pid}"[:3].ljust(3), style="bold")

    time_marks = "".join(f"{slot.time:<3}" for slot in occupancy) + str(len(occupancy))

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
