"""Timestamp helpers shared by batch and run results."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def milliseconds_between(d1: datetime, d2: datetime) -> int:
    """Absolute difference between two datetimes, in whole milliseconds."""
    delta = abs(d2 - d1)
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000
