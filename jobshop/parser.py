"""Instance parser for the plain job-shop text format (JSPLIB / OR-Library).

Format::

    # optional comment lines
    <jobs> <machines>
    <m> <p> <m> <p> ...     one line per job, (machine, duration) pairs

Machine ids are 0-based. A file whose machine ids are all in
``1..machines`` (and never 0) is treated as 1-based and shifted down. When
machine 0 is unused but the ids still fit 0-based, the file is read as
0-based and a warning is logged; pass ``machine_base`` to decide explicitly.
The number of job lines must match the header exactly.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from jobshop.models import DataInstance

logger = logging.getLogger("jssp.parser")


def _ints(line: str, line_no: int) -> list[int]:
    try:
        return [int(token) for token in line.split()]
    except ValueError as e:
        raise ValueError(f"Line {line_no}: non-integer token ({e})") from e


def parse_instance_text(text: str, machine_base: Optional[int] = None) -> DataInstance:
    """Parse instance text into a ``DataInstance``.

    Args:
        text: Instance contents.
        machine_base: 0 or 1 to force the machine id base; ``None`` detects it.

    Raises:
        ValueError: On a malformed header, a job line count that differs from
            the header, a wrong token count, a non-positive duration, a
            machine index out of range or an invalid ``machine_base``.
    """
    if machine_base not in (None, 0, 1):
        raise ValueError(f"machine_base must be 0 or 1, got {machine_base!r}")
    lines = [
        (no, line.strip())
        for no, line in enumerate(text.splitlines(), start=1)
        if line.strip() and not line.strip().startswith("#")
    ]
    if not lines:
        raise ValueError("Empty instance")

    header_no, header_line = lines[0]
    header = _ints(header_line, header_no)
    if len(header) != 2:
        raise ValueError(f"Line {header_no}: expected '<jobs> <machines>', got {header_line!r}")
    jobs_number, machines_number = header
    if jobs_number <= 0 or machines_number <= 0:
        raise ValueError(f"Line {header_no}: jobs and machines must be positive")

    job_lines = lines[1:]
    if len(job_lines) != jobs_number:
        raise ValueError(f"Expected {jobs_number} job lines, found {len(job_lines)}")

    raw: list[tuple[int, list[tuple[int, int]]]] = []
    for no, line in job_lines:
        tokens = _ints(line, no)
        if not tokens or len(tokens) % 2:
            raise ValueError(f"Line {no}: expected machine/duration pairs, got {len(tokens)} tokens")
        pairs = list(zip(tokens[0::2], tokens[1::2]))
        for _, duration in pairs:
            if duration <= 0:
                raise ValueError(f"Line {no}: non-positive processing time {duration}")
        raw.append((no, pairs))

    machines_seen = {m for _, pairs in raw for m, _ in pairs}
    if machine_base is not None:
        shift = machine_base
    else:
        shift = 1 if 0 not in machines_seen and max(machines_seen) == machines_number else 0
        if shift == 0 and 0 not in machines_seen:
            logger.warning(
                "Machine 0 is never used; ids %s were read as 0-based "
                "(pass machine_base=1 for 1-based files)",
                sorted(machines_seen),
            )
    for no, pairs in raw:
        for machine, _ in pairs:
            if not (0 <= machine - shift < machines_number):
                raise ValueError(f"Line {no}: machine index out of range: {machine}")

    jobs = [[(m - shift, p) for m, p in pairs] for _, pairs in raw]
    return DataInstance.from_pairs(jobs, machines_number)


def parse_taillard_data(file_path: str, machine_base: Optional[int] = None) -> DataInstance:
    """Read and parse an instance file."""
    with open(file_path, "r", encoding="utf-8") as f:
        instance = parse_instance_text(f.read(), machine_base=machine_base)
    logger.debug(
        "Parsed %s: jobs=%d machines=%d",
        os.path.basename(file_path),
        instance.jobs_number,
        instance.machines_number,
    )
    return instance


def load_instance(file_path: str, machine_base: Optional[int] = None) -> DataInstance:
    """Load an instance, raising ``FileNotFoundError`` with the path when missing."""
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Instance file not found: {file_path}")
    return parse_taillard_data(file_path, machine_base=machine_base)
