"""Core data structures for job-shop instances.

This module defines:
    Operation    -- one unit of work bound to a machine, with a duration.
    Job          -- ordered sequence of operations plus its completion cursor.
    DataInstance -- all jobs of one instance and the machine count.
    Schedule     -- flat, read-only view of a finished schedule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class Operation:
    """Single operation of a job.

    Attributes:
        job_id: Index of the owning job inside ``DataInstance.jobs``.
        index: Position of the operation inside its job (0-based).
        machine: Machine the operation must run on (0-based).
        duration: Processing time in time units.
        start_time: Assigned start, ``None`` until the operation is scheduled.
    """

    job_id: int
    index: int
    machine: int
    duration: int
    start_time: Optional[int] = None

    @property
    def scheduled(self) -> bool:
        return self.start_time is not None

    @property
    def end_time(self) -> Optional[int]:
        """Completion instant (exclusive), ``None`` when not scheduled."""
        if self.start_time is None:
            return None
        return self.start_time + self.duration


@dataclass(eq=False)
class Job:
    """Ordered sequence of operations with a running completion cursor."""

    id: int
    operations: list[Operation]
    last_completion_time: int = 0

    def __len__(self) -> int:
        return len(self.operations)

    def remaining_work(self, stage: int) -> int:
        """Total duration of the operations from ``stage`` onwards."""
        return sum(op.duration for op in self.operations[stage:])


@dataclass
class DataInstance:
    """Job-shop instance.

    Attributes:
        jobs: Jobs in id order; ``jobs[j].operations[k]`` is operation k of job j.
        machines_number: Number of machines (M).
    """

    jobs: list[Job]
    machines_number: int

    @classmethod
    def from_pairs(cls, jobs: list[list[tuple[int, int]]], machines_number: int) -> DataInstance:
        """Build an instance from nested ``(machine, duration)`` tuples."""
        built = [
            Job(
                id=j,
                operations=[
                    Operation(job_id=j, index=k, machine=machine, duration=duration)
                    for k, (machine, duration) in enumerate(ops)
                ],
            )
            for j, ops in enumerate(jobs)
        ]
        return cls(jobs=built, machines_number=machines_number)

    @property
    def jobs_number(self) -> int:
        return len(self.jobs)

    @property
    def stages(self) -> int:
        """Operation count per job, taken from the first job."""
        return len(self.jobs[0].operations) if self.jobs else 0

    @property
    def operations_number(self) -> int:
        return sum(len(job.operations) for job in self.jobs)

    def job_of(self, operation: Operation) -> Job:
        return self.jobs[operation.job_id]

    def operations(self) -> list[Operation]:
        return [op for job in self.jobs for op in job.operations]

    def to_pairs(self) -> list[list[tuple[int, int]]]:
        return [[(op.machine, op.duration) for op in job.operations] for job in self.jobs]

    def reset(self) -> None:
        """Clear start times and completion cursors so the instance can be rescheduled."""
        for job in self.jobs:
            job.last_completion_time = 0
            for op in job.operations:
                op.start_time = None


@dataclass(frozen=True)
class ScheduleOperationRow:
    """Single scheduled operation with timing and identification data.

    Fields:
        start: Start time of the operation.
        end: Completion time (start + processing_time).
        job: Job identifier.
        operation_index: Index of the operation inside its job (0-based).
        machine: Machine on which the operation is processed.
        processing_time: Duration of the operation.
    """

    start: int
    end: int
    job: int
    operation_index: int
    machine: int
    processing_time: int


@dataclass(frozen=True)
class Schedule:
    """Full schedule plus objective value (cmax).

    Fields:
        operations: Flat list of all scheduled operations, job-major order.
        cmax: Makespan (maximum timeline length across all machines).
    """

    operations: list[ScheduleOperationRow] = field(default_factory=list)
    cmax: int = 0

    def by_machine(self) -> dict[int, list[ScheduleOperationRow]]:
        grouped: dict[int, list[ScheduleOperationRow]] = {}
        for row in self.operations:
            grouped.setdefault(row.machine, []).append(row)
        for rows in grouped.values():
            rows.sort(key=lambda r: r.start)
        return grouped
