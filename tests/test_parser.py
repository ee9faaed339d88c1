"""Pytest tests for `parse_taillard_data` and friends.

Each test creates a temporary instance file and asserts either successful
parsing (structure + normalization) or the correct exception.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager

import pytest

from jobshop.generator import generate_taillard_instance, write_instance
from jobshop.parser import load_instance, parse_instance_text, parse_taillard_data


@contextmanager
def temp_instance(content: str):
    fd, path = tempfile.mkstemp(text=True)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:  # pragma: no cover
            pass


def test_parse_simple_zero_based():
    with temp_instance("""2 2\n0 5 1 3\n1 4 0 2\n""") as path:
        inst = parse_taillard_data(path)
        assert inst.jobs_number == 2
        assert inst.machines_number == 2
        assert len(inst.jobs) == 2
        for job in inst.jobs:
            assert len(job) == 2
        assert {op.machine for op in inst.operations()} == {0, 1}
        assert inst.to_pairs() == [[(0, 5), (1, 3)], [(1, 4), (0, 2)]]


def test_parse_simple_one_based_normalization():
    with temp_instance("""1 3\n1 10 2 5 3 7\n""") as path:
        inst = parse_taillard_data(path)
        assert inst.jobs_number == 1
        assert inst.machines_number == 3
        machines = [op.machine for op in inst.jobs[0].operations]
        assert machines == [0, 1, 2]


def test_comments_and_blank_lines_are_skipped():
    inst = parse_instance_text("# demo\n\n1 2\n\n# job 0\n0 1 1 1\n")
    assert inst.to_pairs() == [[(0, 1), (1, 1)]]


def test_back_references_are_indices():
    inst = parse_instance_text("2 2\n0 5 1 3\n1 4 0 2\n")
    for j, job in enumerate(inst.jobs):
        assert job.id == j
        for k, op in enumerate(job.operations):
            assert (op.job_id, op.index) == (j, k)
            assert inst.job_of(op) is job


def test_fixture_ft06(ft06_path):
    inst = load_instance(ft06_path)
    assert (inst.jobs_number, inst.machines_number, inst.stages) == (6, 6, 6)
    assert inst.jobs[0].operations[0].machine == 2
    assert inst.jobs[0].operations[0].duration == 1


@pytest.mark.parametrize(
    "content",
    [
        """2\n0 5 1 3\n""",  # invalid header (only one int)
        # insufficient job lines (declares 2 jobs, provides 1)
        """2 1\n0 5\n""",
        # more job lines than declared (declares 2 jobs, provides 3)
        """2 2\n0 1 1 1\n1 1 0 1\n0 5 1 5\n""",
        """1 2\n0 5 1\n""",  # invalid token count (3 instead of 4)
        """1 1\n0 0\n""",  # non-positive processing time
        """1 2\n5 3 1 2\n""",  # machine index out of range
        """1 2\n0 x 1 2\n""",  # non-integer token
        """""",  # empty file
    ],
)
def test_parse_errors(content: str):
    with temp_instance(content) as path:
        with pytest.raises(ValueError):
            parse_taillard_data(path)


def test_explicit_one_based_file_without_top_machine():
    # Ids 1 and 2 fit either base; only the caller knows the file is 1-based.
    inst = parse_instance_text("2 3\n1 5 2 3\n2 4 1 2\n", machine_base=1)
    assert {op.machine for op in inst.operations()} == {0, 1}
    assert inst.to_pairs() == [[(0, 5), (1, 3)], [(1, 4), (0, 2)]]


def test_unused_machine_zero_is_read_zero_based_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="jssp.parser"):
        inst = parse_instance_text("2 3\n1 5 2 3\n2 4 1 2\n")
    assert {op.machine for op in inst.operations()} == {1, 2}
    assert "Machine 0 is never used" in caplog.text


def test_detected_one_based_file_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="jssp.parser"):
        parse_instance_text("1 3\n1 10 2 5 3 7\n")
    assert caplog.records == []


@pytest.mark.parametrize(
    "content, machine_base",
    [
        ("""1 2\n0 5 1 3\n""", 2),  # unsupported base
        ("""1 2\n1 5 2 3\n""", 0),  # id 2 out of range when 0-based
        ("""1 2\n0 5 1 3\n""", 1),  # id 0 out of range when 1-based
    ],
)
def test_machine_base_errors(content: str, machine_base: int):
    with pytest.raises(ValueError):
        parse_instance_text(content, machine_base=machine_base)


def test_load_instance_passes_machine_base(tmp_path):
    path = tmp_path / "one_based"
    path.write_text("2 3\n1 5 2 3\n2 4 1 2\n")
    inst = load_instance(str(path), machine_base=1)
    assert inst.to_pairs() == [[(0, 5), (1, 3)], [(1, 4), (0, 2)]]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_instance(str(tmp_path / "nope"))


def test_generated_instance_written_and_read_back(tmp_path):
    data = generate_taillard_instance(4, 3, seed=7)
    assert all(sorted(op.machine for op in job.operations) == [0, 1, 2] for job in data.jobs)
    path = tmp_path / "rand"
    write_instance(data, str(path))
    assert load_instance(str(path)).to_pairs() == data.to_pairs()


def test_fixture_two_by_two_schedules_to_nine():
    from conftest import FIXTURES_DIR, two_by_two
    from jobshop.scheduler import schedule_instance

    inst = load_instance(str(FIXTURES_DIR / "two_by_two"))
    assert inst.to_pairs() == two_by_two().to_pairs()
    assert schedule_instance(inst).makespan() == 9
