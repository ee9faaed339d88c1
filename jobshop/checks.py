"""Feasibility checks for finished schedules and machine timelines.

Each check raises ``AssertionError`` on the first violation it finds and
returns ``True`` otherwise, so it can be used inside ``assert`` statements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jobshop.models import DataInstance, Schedule
from jobshop.timeline import INFINITY, Timeline

if TYPE_CHECKING:
    from jobshop.scheduler import Scheduler


def check_timeline_partition(timeline: Timeline) -> bool:
    """Ensure the intervals cover ``[0, +inf)`` contiguously without overlap.

    Also checks that the last interval is free and unbounded and that every
    occupied interval is exactly as long as its operation.
    """
    intervals = list(timeline)
    if not intervals:
        raise AssertionError("Timeline has no intervals")
    if intervals[0].start != 0:
        raise AssertionError(f"Timeline starts at {intervals[0].start}, not 0")
    for prev, cur in zip(intervals, intervals[1:]):
        if prev.end + 1 != cur.start:
            raise AssertionError(f"Gap or overlap between {prev!r} and {cur!r}")
    for interval in intervals:
        if interval.start > interval.end:
            raise AssertionError(f"Inverted interval {interval!r}")
        op = interval.operation
        if op is not None and interval.end - interval.start + 1 != op.duration:
            raise AssertionError(f"{interval!r} does not match duration {op.duration}")
    last = intervals[-1]
    if last.occupied or last.end != INFINITY:
        raise AssertionError(f"Last interval is not the open future: {last!r}")
    return True


def check_no_machine_overlap(schedule: Schedule) -> bool:
    """Ensure no two operations overlap on the same machine.

    Iterates operations grouped by machine, ordered by start, verifying
    that each starts no earlier than the previous one ended.
    """
    for machine, rows in schedule.by_machine().items():
        prev_end = 0
        for r in rows:
            if r.start < prev_end:
                raise AssertionError(
                    f"Overlap on machine {machine} between end {prev_end} and start {r.start}"
                )
            prev_end = r.end
    return True


def check_job_order(schedule: Schedule) -> bool:
    """Ensure each operation starts after its predecessor in the job finished."""
    by_job: dict[int, list] = {}
    for row in schedule.operations:
        by_job.setdefault(row.job, []).append(row)
    for job, rows in by_job.items():
        rows.sort(key=lambda r: r.operation_index)
        for prev, cur in zip(rows, rows[1:]):
            if cur.start < prev.end:
                raise AssertionError(
                    f"Job {job}: operation {cur.operation_index} starts at {cur.start} "
                    f"before operation {prev.operation_index} ends at {prev.end}"
                )
    return True


def check_complete(data: DataInstance, schedule: Schedule) -> bool:
    """Ensure every operation got a non-negative start time."""
    if len(schedule.operations) != data.operations_number:
        raise AssertionError(
            f"Incomplete schedule: {len(schedule.operations)}/{data.operations_number} operations"
        )
    negative = [r for r in schedule.operations if r.start < 0]
    if negative:
        raise AssertionError(f"Negative start time: {negative[0]!r}")
    return True


def verify(scheduler: Scheduler) -> bool:
    """Run every check against a finished scheduler."""
    schedule = scheduler.to_schedule()
    for timeline in scheduler.table:
        check_timeline_partition(timeline)
    check_complete(scheduler.data, schedule)
    check_no_machine_overlap(schedule)
    check_job_order(schedule)
    if schedule.cmax != max(t.length() for t in scheduler.table):
        raise AssertionError("Makespan differs from the longest timeline")
    return True
