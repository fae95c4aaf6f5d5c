"""Prefixed ID and job-number generation."""

import uuid


def generate_id(prefix: str) -> str:
    """Generate a prefixed unique ID.

    Args:
        prefix: The prefix (e.g., "job_", "part_", "qc_").

    Returns:
        A string like "job_a1b2c3d4e5f6a7b8".
    """
    short_uuid = uuid.uuid4().hex[:16]
    return f"{prefix}{short_uuid}"


def next_job_number(prefix: str, year: int, latest: str | None) -> str:
    """Next sequential job number for the year, e.g. ``BRIM-2026-007``.

    ``latest`` is the highest existing number for the same prefix and year.
    """
    sequence = 1
    if latest:
        sequence = int(latest.rsplit("-", 1)[1]) + 1
    return f"{prefix}-{year}-{sequence:03d}"
