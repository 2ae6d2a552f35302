"""
UTC calendar-month windows used to scope leaderboard queries.
"""
import calendar
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional


class TimeWindow(NamedTuple):
    """A contest month: first instant to last second, both UTC."""
    start: datetime
    end: datetime


def _utc_now(now: Optional[datetime] = None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def month_range(year: int, month: int) -> TimeWindow:
    """Window covering the given calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, 0, 0, 0, tzinfo=timezone.utc)
    end = datetime(year, month, last_day, 23, 59, 59, tzinfo=timezone.utc)
    return TimeWindow(start, end)


def current_month_range(now: Optional[datetime] = None) -> TimeWindow:
    """
    Window for the month containing `now`.

    The end is the last second of the month even though it lies in the
    future: the window is the whole contest month, not "so far".
    """
    now = _utc_now(now)
    return month_range(now.year, now.month)


def previous_month_range(now: Optional[datetime] = None) -> TimeWindow:
    """Window for the month before the one containing `now`."""
    now = _utc_now(now)
    if now.month == 1:
        return month_range(now.year - 1, 12)
    return month_range(now.year, now.month - 1)


def to_iso(instant: datetime) -> str:
    """ISO-8601 with milliseconds and a Z suffix, e.g. 2026-10-01T00:00:00.000Z"""
    instant = _utc_now(instant)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


def to_date(instant: datetime) -> str:
    return _utc_now(instant).strftime("%Y-%m-%d")


def percentage_left(window: TimeWindow, now: Optional[datetime] = None) -> float:
    """
    Share of the window still ahead of `now`, clamped to [0, 100] and
    rounded to 2 decimals.
    """
    now = _utc_now(now)
    total = (window.end - window.start) / timedelta(seconds=1)
    if total <= 0:
        return 0.0
    elapsed = (now - window.start) / timedelta(seconds=1)
    left = (total - elapsed) / total * 100
    return round(max(0.0, min(100.0, left)), 2)
