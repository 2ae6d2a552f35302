"""
Staleness-bounded in-memory cache for normalized leaderboards.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from app.models.leaderboard_models import LeaderboardResponse

# Set up logger for this module
logger = logging.getLogger(__name__)

SLOTS = ("current", "previous")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheEntry:
    """Last good response for a slot, the window it covers and when it was fetched."""

    def __init__(
        self,
        data: Optional[LeaderboardResponse] = None,
        fetched_at: Optional[datetime] = None,
        window_start: Optional[datetime] = None,
    ):
        self.data = data
        self.fetched_at = fetched_at
        self.window_start = window_start

    def covers(self, window_start: Optional[datetime]) -> bool:
        return window_start is None or self.window_start == window_start


class LeaderboardCache:
    """
    One entry per period slot ("current", "previous").

    Entries are never evicted: the TTL only decides whether a value is
    fresh. An expired value stays available through stale_fallback() so
    an upstream outage can be bridged with the last good response.

    When a window start is passed, an entry fetched for a different month
    is neither fresh nor a fallback, so "current" never serves last
    month's board after the rollover.

    Each slot has its own asyncio.Lock. Callers hold it across the
    check-fetch-put sequence so concurrent misses trigger a single
    upstream call instead of racing to overwrite the slot.
    """

    def __init__(self, ttl: timedelta, clock: Optional[Clock] = None):
        self.ttl = ttl
        self.clock = clock or utc_now
        self._entries: Dict[str, CacheEntry] = {slot: CacheEntry() for slot in SLOTS}
        self._locks: Dict[str, asyncio.Lock] = {slot: asyncio.Lock() for slot in SLOTS}

    def _entry(self, slot: str) -> CacheEntry:
        if slot not in self._entries:
            raise KeyError(f"Unknown cache slot '{slot}'")
        return self._entries[slot]

    def lock(self, slot: str) -> asyncio.Lock:
        self._entry(slot)
        return self._locks[slot]

    def get(
        self,
        slot: str,
        now: Optional[datetime] = None,
        window_start: Optional[datetime] = None,
    ) -> Optional[LeaderboardResponse]:
        """Cached value if present, for the same window and younger than the TTL, else None."""
        entry = self._entry(slot)
        if entry.data is None or entry.fetched_at is None or not entry.covers(window_start):
            return None
        now = now or self.clock()
        if now - entry.fetched_at < self.ttl:
            return entry.data
        return None

    def put(
        self,
        slot: str,
        data: LeaderboardResponse,
        now: Optional[datetime] = None,
        window_start: Optional[datetime] = None,
    ) -> None:
        self._entry(slot)
        self._entries[slot] = CacheEntry(data, now or self.clock(), window_start)

    def stale_fallback(self, slot: str, window_start: Optional[datetime] = None) -> Optional[LeaderboardResponse]:
        """Cached value regardless of age, as long as it covers the same window."""
        entry = self._entry(slot)
        if not entry.covers(window_start):
            return None
        return entry.data

    def age(self, slot: str, now: Optional[datetime] = None) -> Optional[timedelta]:
        entry = self._entry(slot)
        if entry.fetched_at is None:
            return None
        return (now or self.clock()) - entry.fetched_at

    def clear(self) -> None:
        for slot in SLOTS:
            self._entries[slot] = CacheEntry()
