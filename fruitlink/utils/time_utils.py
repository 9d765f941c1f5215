"""
Time and calendar helpers.

Key concepts:
  - Clocks: anything time-dependent (forecast cache, insight memo, delayed
    navigation) takes a ``Clock`` callable returning seconds, so tests can
    drive time explicitly instead of sleeping.
  - Month labels: forecast points are labelled ``YYYY-MM``; the first label is
    the month *after* the last historical observation.
"""

from __future__ import annotations

import time
from datetime import date, datetime, timezone
from typing import Callable

Clock = Callable[[], float]
"""Zero-argument callable returning a monotonically non-decreasing time in seconds."""


def monotonic_clock() -> float:
    """Default ``Clock`` implementation backed by ``time.monotonic``."""
    return time.monotonic()


def add_months(start: date, months: int) -> date:
    """Return the first day of the month ``months`` after ``start``'s month.

    The day component of ``start`` is ignored, so month-end dates never
    overflow (``2024-01-31`` + 1 → ``2024-02-01``).

    Args:
        start: Reference date.
        months: Number of months to add (may be 0 or negative).

    Returns:
        A ``date`` on day 1 of the target month.
    """
    index = start.year * 12 + (start.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def next_month_labels(start: date | str, count: int) -> list[str]:
    """Generate ``count`` ``YYYY-MM`` labels following ``start``'s month.

    Args:
        start: Last historical date, as a ``date`` or ISO ``YYYY-MM-DD`` string.
        count: Number of labels to produce.

    Returns:
        Labels for ``start + 1`` month through ``start + count`` months.

    Raises:
        ValueError: If ``start`` is a string that is not an ISO date.
    """
    if isinstance(start, str):
        start = date.fromisoformat(start)
    return [add_months(start, i).strftime("%Y-%m") for i in range(1, count + 1)]


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)
