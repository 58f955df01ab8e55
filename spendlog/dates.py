"""Date utilities for spendlog.

Pure functions for month boundaries, epoch-millisecond conversion and
formatting. All boundaries are in the host's local time.
"""

import calendar
from datetime import datetime

from spendlog.domain.models import Timestamp


def to_millis(dt: datetime) -> Timestamp:
    """Convert a local datetime to epoch milliseconds.

    Integer arithmetic keeps .999 boundaries exact.
    """
    seconds = int(dt.replace(microsecond=0).timestamp())
    return Timestamp(seconds * 1000 + dt.microsecond // 1000)


def from_millis(ms: int) -> datetime:
    """Convert epoch milliseconds to a local datetime."""
    return datetime.fromtimestamp(ms // 1000).replace(microsecond=(ms % 1000) * 1000)


def month_bounds(year: int, month: int) -> tuple[Timestamp, Timestamp]:
    """Calculate the first and last instant of a month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        Tuple of (start, end) where:
        - start: First day at 00:00:00.000
        - end: Last day at 23:59:59.999

    Raises:
        ValueError: If month is out of range.
    """
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999000)
    return to_millis(start), to_millis(end)


def start_of_current_month(now: datetime | None = None) -> Timestamp:
    """Get the first instant of the current month."""
    now = now or datetime.now()
    return month_bounds(now.year, now.month)[0]


def end_of_current_month(now: datetime | None = None) -> Timestamp:
    """Get the last instant of the current month."""
    now = now or datetime.now()
    return month_bounds(now.year, now.month)[1]


def parse_month(month: str) -> tuple[int, int]:
    """Parse a YYYY-MM string.

    Raises:
        ValueError: If the string is not a valid month.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def format_date(ms: int, pattern: str = "%d/%m/%Y") -> str:
    """Format epoch milliseconds, e.g. 01/12/2025."""
    return from_millis(ms).strftime(pattern)


def format_month_label(ms: int) -> str:
    """Format the month of a timestamp, e.g. December 2025."""
    return from_millis(ms).strftime("%B %Y")
