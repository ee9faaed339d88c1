"""Dispatch heuristics: stage-indexed priority relations between jobs.

A heuristic is a plain function ``less(a, b, stage) -> bool`` answering "does
job ``a`` go before job ``b`` at this stage". It holds no state and may look
at any attribute of the two jobs, usually their ``stage``-th operation.

Ties: none of the shipped heuristics is a strict total order. Jobs the
relation does not separate keep their incoming order because ``sorted`` is
stable, and the dispatch loop always feeds jobs in ascending id order, so
the lower job id wins a tie.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Iterable

from jobshop.models import Job

Heuristic = Callable[[Job, Job, int], bool]


def longest_operation_first(a: Job, b: Job, stage: int) -> bool:
    """LPT: the longer stage operation is dispatched first."""
    return a.operations[stage].duration > b.operations[stage].duration


def shortest_operation_first(a: Job, b: Job, stage: int) -> bool:
    """SPT: the shorter stage operation is dispatched first."""
    return a.operations[stage].duration < b.operations[stage].duration


def most_work_remaining(a: Job, b: Job, stage: int) -> bool:
    """MWKR: the job with more processing time left (from this stage on) goes first."""
    return a.remaining_work(stage) > b.remaining_work(stage)


def input_order(a: Job, b: Job, stage: int) -> bool:
    """Baseline: plain job id order."""
    return a.id < b.id


HEURISTICS: dict[str, Heuristic] = {
    "longest_operation_first": longest_operation_first,
    "shortest_operation_first": shortest_operation_first,
    "most_work_remaining": most_work_remaining,
    "input_order": input_order,
}

DEFAULT_HEURISTIC = "longest_operation_first"


def get_heuristic(name: str) -> Heuristic:
    """Resolve a registered heuristic by name.

    Raises:
        ValueError: If ``name`` is not registered.
    """
    try:
        return HEURISTICS[name]
    except KeyError:
        known = ", ".join(sorted(HEURISTICS))
        raise ValueError(f"Unknown heuristic: {name!r} (known: {known})") from None


def sort_jobs(jobs: Iterable[Job], heuristic: Heuristic, stage: int) -> list[Job]:
    """Order jobs for one stage according to ``heuristic`` (stable on ties)."""

    def compare(a: Job, b: Job) -> int:
        if heuristic(a, b, stage):
            return -1
        if heuristic(b, a, stage):
            return 1
        return 0

    return sorted(jobs, key=cmp_to_key(compare))
