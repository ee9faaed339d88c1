"""Per-machine timelines: ordered partitions of ``[0, +inf)`` into intervals.

A ``Timeline`` is a doubly linked list of ``Interval`` nodes. The interval
objects double as handles: inserting a neighbour next to one interval never
moves or invalidates any other interval, so the placement code can hold a
reference while it splits the very interval it is looking at.

Invariants (held after every public mutation performed by the scheduler):
    - consecutive intervals satisfy ``a.end + 1 == b.start``;
    - the first interval starts at 0;
    - the last interval is free and ends at ``INFINITY``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from jobshop.models import Operation

INFINITY = math.inf


class Interval:
    """Closed time range ``[start, end]`` on one machine.

    ``operation`` is the occupant, ``None`` for a free interval. A free
    interval may end at ``INFINITY`` (the open future).
    """

    __slots__ = ("start", "end", "operation", "_prev", "_next")

    def __init__(self, start: int, end: float, operation: Optional[Operation] = None) -> None:
        self.start = start
        self.end = end
        self.operation = operation
        self._prev: Optional[Interval] = None
        self._next: Optional[Interval] = None

    @classmethod
    def empty(cls, start: int = 0, end: float = INFINITY) -> Interval:
        return cls(start, end, None)

    @property
    def occupied(self) -> bool:
        return self.operation is not None

    @property
    def free(self) -> bool:
        return self.operation is None

    def includes(self, time: int) -> bool:
        """True iff ``start <= time <= end``."""
        return self.start <= time <= self.end

    def fits(self, earliest: int, duration: int) -> bool:
        """True iff a block of ``duration`` units starting no earlier than
        ``earliest`` (clipped to this interval's start) ends by ``end``."""
        return max(self.start, earliest) + duration - 1 <= self.end

    def __repr__(self) -> str:
        owner = "free" if self.operation is None else f"job {self.operation.job_id}"
        return f"Interval({self.start}, {self.end}, {owner})"


class Timeline:
    """Ordered sequence of intervals for one machine."""

    def __init__(self) -> None:
        self._head: Optional[Interval] = None
        self._tail: Optional[Interval] = None
        self._size = 0

    @classmethod
    def unbounded(cls) -> Timeline:
        """Fresh timeline made of a single free ``[0, INFINITY]`` interval."""
        timeline = cls()
        timeline.append(Interval.empty())
        return timeline

    def __iter__(self) -> Iterator[Interval]:
        return self.iter_from(self._head)

    def __len__(self) -> int:
        return self._size

    def iter_from(self, handle: Optional[Interval]) -> Iterator[Interval]:
        """Iterate forward starting at ``handle`` (inclusive)."""
        node = handle
        while node is not None:
            yield node
            node = node._next

    @property
    def last(self) -> Interval:
        if self._tail is None:
            raise IndexError("empty timeline")
        return self._tail

    def interval_at(self, time: int) -> Interval:
        """Return the first interval containing ``time``.

        Raises:
            LookupError: If no interval covers ``time`` (negative time, or a
                timeline that was not built over ``[0, INFINITY]``).
        """
        for interval in self:
            if interval.includes(time):
                return interval
        raise LookupError(f"no interval covers time {time}")

    def append(self, interval: Interval) -> None:
        interval._prev = self._tail
        interval._next = None
        if self._tail is None:
            self._head = interval
        else:
            self._tail._next = interval
        self._tail = interval
        self._size += 1

    def insert_before(self, handle: Interval, interval: Interval) -> None:
        interval._prev = handle._prev
        interval._next = handle
        if handle._prev is None:
            self._head = interval
        else:
            handle._prev._next = interval
        handle._prev = interval
        self._size += 1

    def insert_after(self, handle: Interval, interval: Interval) -> None:
        interval._prev = handle
        interval._next = handle._next
        if handle._next is None:
            self._tail = interval
        else:
            handle._next._prev = interval
        handle._next = interval
        self._size += 1

    def length(self) -> int:
        """First unused instant: the machine's contribution to the makespan."""
        last = self.last
        if last.occupied:
            return int(last.end) + 1
        return last.start

    def __lt__(self, other: Timeline) -> bool:
        return self.length() < other.length()

    def occupied_intervals(self) -> list[Interval]:
        return [interval for interval in self if interval.occupied]

    def quantized(self, limit: int) -> list[int]:
        """Job id occupying each time unit of ``[0, limit)``, ``-1`` when idle."""
        cells: list[int] = []
        for interval in self:
            if interval.start >= limit:
                break
            stop = limit if interval.end >= limit else int(interval.end) + 1
            owner = interval.operation.job_id if interval.operation is not None else -1
            cells.extend([owner] * (stop - interval.start))
        return cells

    def __repr__(self) -> str:
        return "Timeline(" + ", ".join(repr(interval) for interval in self) + ")"
