"""Text reports: start-time summary and quantized Gantt chart.

Both readers are pure: they only look at the scheduler's timelines and the
operations' start times, so calling them repeatedly returns the same text.
Colouring is a rendering strategy picked once at startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jobshop.scheduler import Scheduler


class NoColor:
    """Plain rendering (non-ANSI terminals, files, tests)."""

    def paint(self, text: str, job_id: int) -> str:
        return text


class AnsiColor:
    """Bold ANSI foreground colours cycling through six hues by job id."""

    def paint(self, text: str, job_id: int) -> str:
        return f"\033[1;{31 + job_id % 6}m{text}\033[0m"


def summary(scheduler: Scheduler) -> str:
    """Makespan on the first line, then each job's start times in sequence order."""
    lines = [str(scheduler.makespan())]
    for job in scheduler.data.jobs:
        lines.append(" ".join(str(op.start_time) for op in job.operations))
    return "\n".join(lines) + "\n"


def gantt_chart(scheduler: Scheduler, colors: NoColor | AnsiColor | None = None) -> str:
    """Render one row per machine, one cell per time unit.

    Busy cells show the zero-padded job id, idle cells are underscores.
    """
    if colors is None:
        colors = NoColor()
    longest = scheduler.makespan()
    cell_width = len(str(max(longest, scheduler.data.jobs_number)))
    left_width = len(str(len(scheduler.table)))
    idle = "_" * cell_width + "|"

    lines = [" " * (3 + left_width) + "".join(f"{t:0{cell_width}d} " for t in range(longest))]
    for machine, timeline in enumerate(scheduler.table):
        row = [f"{machine:0{left_width}d}: |"]
        for job_id in timeline.quantized(longest):
            if job_id == -1:
                row.append(idle)
            else:
                row.append(colors.paint(f"{job_id:0{cell_width}d}", job_id) + "|")
        lines.append("".join(row))
    return "\n".join(lines) + "\n"
