"""Stage-by-stage greedy dispatch over per-machine timelines.

The scheduler owns one ``Timeline`` per machine. ``place`` puts a single
operation into the first free interval, reachable by a forward scan from the
job's completion cursor, that still has room for the whole operation
(first-fit, not best-fit). ``schedule_jobs`` runs the dispatch loop: for each
stage every job is offered its stage-th operation, in the order chosen by a
heuristic, before any job moves on to the next stage.
"""

from __future__ import annotations

import logging

from jobshop.heuristics import Heuristic, longest_operation_first, sort_jobs
from jobshop.models import DataInstance, Operation, Schedule, ScheduleOperationRow
from jobshop.timeline import Interval, Timeline

logger = logging.getLogger("jssp.scheduler")


class ConfigurationError(ValueError):
    """Instance violates a precondition of the dispatch loop."""


class SchedulingError(RuntimeError):
    """Scheduler API misuse (e.g. placing an operation twice)."""


def validate_instance(data: DataInstance) -> None:
    """Check the preconditions the placement algorithm relies on.

    Raises:
        ConfigurationError: If there are no jobs, jobs have different
            operation counts, a duration is not positive, a machine id is
            out of range, or an operation's ``job_id``/``index`` does not
            match its position.
    """
    if not data.jobs:
        raise ConfigurationError("Instance has no jobs")
    if data.machines_number <= 0:
        raise ConfigurationError(f"Invalid machine count: {data.machines_number}")
    stages = data.stages
    for position, job in enumerate(data.jobs):
        if job.id != position:
            raise ConfigurationError(f"Job at position {position} has id {job.id}")
        if len(job.operations) != stages:
            raise ConfigurationError(
                f"Job {job.id} has {len(job.operations)} operations, expected {stages}"
            )
        for k, op in enumerate(job.operations):
            if op.job_id != job.id or op.index != k:
                raise ConfigurationError(
                    f"Operation {k} of job {job.id} is labelled ({op.job_id}, {op.index})"
                )
            if op.duration <= 0:
                raise ConfigurationError(
                    f"Non-positive duration {op.duration} for job {job.id} operation {k}"
                )
            if not (0 <= op.machine < data.machines_number):
                raise ConfigurationError(
                    f"Machine index out of range for job {job.id} operation {k}: {op.machine}"
                )


class Scheduler:
    """Machine table plus the placement and dispatch algorithms."""

    def __init__(self, data: DataInstance) -> None:
        validate_instance(data)
        self.data = data
        self.table: list[Timeline] = [Timeline.unbounded() for _ in range(data.machines_number)]

    def place(self, operation: Operation) -> Interval:
        """Schedule one operation at its earliest feasible first-fit slot.

        Returns:
            The interval now occupied by ``operation``.

        Raises:
            SchedulingError: If the operation already has a start time.
        """
        if operation.scheduled:
            raise SchedulingError(
                f"Operation {operation.index} of job {operation.job_id} is already scheduled"
            )
        job = self.data.job_of(operation)
        timeline = self.table[operation.machine]
        earliest = job.last_completion_time

        # The free tail is unbounded, so the scan always finds a slot.
        for interval in timeline.iter_from(timeline.interval_at(earliest)):
            if interval.free and interval.fits(earliest, operation.duration):
                break

        start = max(interval.start, earliest)
        end = start + operation.duration - 1
        original_start, original_end = interval.start, interval.end

        interval.operation = operation
        interval.start = start
        interval.end = end

        if start > original_start:
            timeline.insert_before(interval, Interval.empty(original_start, start - 1))
        if end < original_end:
            timeline.insert_after(interval, Interval.empty(end + 1, original_end))

        operation.start_time = start
        job.last_completion_time = start + operation.duration
        logger.debug(
            "Placed job=%d op=%d machine=%d start=%d end=%d",
            operation.job_id,
            operation.index,
            operation.machine,
            start,
            end + 1,
        )
        return interval

    def schedule_jobs(self, heuristic: Heuristic = longest_operation_first) -> int:
        """Run the stage-by-stage dispatch loop and return the makespan.

        Every job gets its stage ``i`` operation placed before any job is
        offered stage ``i + 1``. The instance's job list is left in id order.
        """
        jobs = list(self.data.jobs)
        for stage in range(self.data.stages):
            order = sort_jobs(jobs, heuristic, stage)
            logger.debug("Stage %d order: %s", stage, [job.id for job in order])
            for job in order:
                self.place(job.operations[stage])
        cmax = self.makespan()
        logger.info(
            "Scheduled %d operations on %d machines with %s: makespan=%d",
            self.data.operations_number,
            self.data.machines_number,
            getattr(heuristic, "__name__", repr(heuristic)),
            cmax,
        )
        return cmax

    def makespan(self) -> int:
        """Length of the longest timeline."""
        return max(self.table).length()

    def to_schedule(self) -> Schedule:
        """Flat read-only view of every scheduled operation, job-major."""
        rows = [
            ScheduleOperationRow(
                start=op.start_time,
                end=op.end_time,
                job=op.job_id,
                operation_index=op.index,
                machine=op.machine,
                processing_time=op.duration,
            )
            for op in self.data.operations()
            if op.start_time is not None
        ]
        return Schedule(operations=rows, cmax=self.makespan())

    def summary(self) -> str:
        from jobshop.report import summary

        return summary(self)

    def gantt_chart(self, color: bool = False) -> str:
        from jobshop.report import AnsiColor, NoColor, gantt_chart

        return gantt_chart(self, AnsiColor() if color else NoColor())


def schedule_instance(data: DataInstance, heuristic: Heuristic = longest_operation_first) -> Scheduler:
    """Build a scheduler for ``data``, run the dispatch loop and return it."""
    scheduler = Scheduler(data)
    scheduler.schedule_jobs(heuristic)
    return scheduler
