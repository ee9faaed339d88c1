import pytest

from jobshop.checks import check_timeline_partition
from jobshop.models import Operation
from jobshop.timeline import INFINITY, Interval, Timeline


def test_interval_point_containment() -> None:
    iv = Interval(3, 7)
    assert iv.includes(3)
    assert iv.includes(7)
    assert not iv.includes(2)
    assert not iv.includes(8)
    assert Interval.empty(5).includes(10**12)


def test_interval_fits_clips_to_earliest() -> None:
    iv = Interval(3, 7)  # 5 units
    assert iv.fits(0, 5)
    assert not iv.fits(0, 6)
    assert iv.fits(5, 3)  # 5, 6, 7
    assert not iv.fits(6, 3)
    assert Interval.empty(0).fits(100, 10**9)


def test_interval_occupancy_flags() -> None:
    op = Operation(job_id=0, index=0, machine=0, duration=2)
    assert Interval.empty().free
    assert Interval(0, 1, op).occupied


def test_fresh_timeline_is_single_open_interval() -> None:
    tl = Timeline.unbounded()
    assert len(tl) == 1
    only = tl.interval_at(0)
    assert only.start == 0 and only.end == INFINITY and only.free
    assert tl.length() == 0
    check_timeline_partition(tl)


def test_insertions_keep_other_handles_valid() -> None:
    tl = Timeline.unbounded()
    middle = tl.interval_at(0)
    middle.start, middle.end = 4, 6
    tl.insert_before(middle, Interval.empty(0, 3))
    tail = Interval.empty(7)
    tl.insert_after(middle, tail)

    head = tl.interval_at(0)
    tl.insert_after(head, Interval.empty(2, 3))
    head.end = 1

    assert [(iv.start, iv.end) for iv in tl] == [(0, 1), (2, 3), (4, 6), (7, INFINITY)]
    assert tl.interval_at(5) is middle
    assert tl.interval_at(100) is tail
    assert tl.last is tail
    assert len(tl) == 4
    assert list(tl.iter_from(middle)) == [middle, tail]
    check_timeline_partition(tl)


def test_length_is_first_unused_instant() -> None:
    op = Operation(job_id=1, index=0, machine=0, duration=3)
    tl = Timeline()
    tl.append(Interval.empty(0, 1))
    tl.append(Interval(2, 4, op))
    assert tl.length() == 5  # packed up to an occupied tail
    tl.append(Interval.empty(5))
    assert tl.length() == 5


def test_timelines_order_by_length() -> None:
    op = Operation(job_id=0, index=0, machine=0, duration=2)
    short, long_ = Timeline.unbounded(), Timeline()
    long_.append(Interval(0, 1, op))
    long_.append(Interval.empty(2))
    assert short < long_
    assert max([long_, short]) is long_


def test_interval_at_rejects_uncovered_time() -> None:
    tl = Timeline.unbounded()
    with pytest.raises(LookupError):
        tl.interval_at(-1)


def test_quantized_marks_owners_and_idle_units() -> None:
    op = Operation(job_id=4, index=0, machine=0, duration=2)
    tl = Timeline()
    tl.append(Interval.empty(0, 0))
    tl.append(Interval(1, 2, op))
    tl.append(Interval.empty(3))
    assert tl.quantized(5) == [-1, 4, 4, -1, -1]
    assert tl.quantized(2) == [-1, 4]
    assert tl.quantized(0) == []
    assert tl.occupied_intervals()[0].operation is op
