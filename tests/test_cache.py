from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from app.services.cache import LeaderboardCache
from app.services.leaderboard import LeaderboardService
from app.services.ranking import BETBOLT, MalformedUpstreamError, normalize
from app.upstream.base import UpstreamError
from app.utils.time_windows import current_month_range
from tests.fakes import FakeClock

T0 = datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)


def _response(wager: float = 1.0):
    payload = {"data": [{"username": "cached_user", "wagered": wager}]}
    return normalize(payload, current_month_range(T0), BETBOLT)


def test_get_is_a_miss_until_put():
    cache = LeaderboardCache(timedelta(minutes=30))
    assert cache.get("current", T0) is None
    assert cache.stale_fallback("current") is None


def test_get_respects_ttl():
    cache = LeaderboardCache(timedelta(minutes=30))
    data = _response()
    cache.put("current", data, T0)
    assert cache.get("current", T0 + timedelta(minutes=29, seconds=59)) is data
    assert cache.get("current", T0 + timedelta(minutes=30)) is None
    assert cache.stale_fallback("current") is data


def test_slots_are_independent():
    cache = LeaderboardCache(timedelta(minutes=30))
    cache.put("current", _response(1), T0)
    assert cache.get("previous", T0) is None


def test_put_overwrites_and_clear_empties():
    cache = LeaderboardCache(timedelta(minutes=30))
    cache.put("current", _response(1), T0)
    newer = _response(2)
    cache.put("current", newer, T0 + timedelta(minutes=1))
    assert cache.get("current", T0 + timedelta(minutes=2)) is newer
    assert cache.age("current", T0 + timedelta(minutes=2)) == timedelta(minutes=1)
    cache.clear()
    assert cache.stale_fallback("current") is None


def test_unknown_slot():
    cache = LeaderboardCache(timedelta(minutes=30))
    with pytest.raises(KeyError):
        cache.get("next", T0)


def test_cache_uses_its_clock_by_default():
    clock = FakeClock(T0)
    cache = LeaderboardCache(timedelta(minutes=30), clock=clock)
    cache.put("previous", _response())
    clock.advance(minutes=31)
    assert cache.get("previous") is None


class SlowClient:
    def __init__(self):
        self.calls = 0
        self.fail = False

    async def fetch(self, window, query=None):
        self.calls += 1
        await asyncio.sleep(0.01)
        if self.fail:
            raise UpstreamError("down", status_code=503, body="maintenance")
        return {"data": [{"username": "racer", "wagered": self.calls}]}


def _service(client, clock):
    return LeaderboardService(BETBOLT, client, LeaderboardCache(timedelta(minutes=30), clock=clock), clock=clock)


def test_concurrent_misses_share_one_fetch():
    client = SlowClient()
    service = _service(client, FakeClock(T0))

    async def run():
        return await asyncio.gather(*(service.get_leaderboard("current") for _ in range(5)))

    results = asyncio.run(run())
    assert client.calls == 1
    assert all(r is results[0] for r in results)


def test_service_refetches_after_ttl_and_falls_back_when_down():
    client = SlowClient()
    clock = FakeClock(T0)
    service = _service(client, clock)

    first = asyncio.run(service.get_leaderboard("current"))
    clock.advance(minutes=10)
    assert asyncio.run(service.get_leaderboard("current")) is first
    assert client.calls == 1

    clock.advance(minutes=30)
    client.fail = True
    assert asyncio.run(service.get_leaderboard("current")) is first
    assert client.calls == 2


def test_service_raises_when_nothing_cached():
    client = SlowClient()
    client.fail = True
    service = _service(client, FakeClock(T0))
    with pytest.raises(UpstreamError) as exc:
        asyncio.run(service.get_leaderboard("previous"))
    assert exc.value.status_code == 503


def test_service_window_tracks_the_clock():
    clock = FakeClock(datetime(2026, 10, 31, 23, 59, 59, tzinfo=timezone.utc))
    service = _service(SlowClient(), clock)
    assert service.window("current").start.month == 10
    clock.advance(seconds=1)
    assert service.window("current").start.month == 11
    assert service.window("previous").start.month == 10


def test_entry_for_another_window_is_neither_fresh_nor_fallback():
    cache = LeaderboardCache(timedelta(minutes=30))
    october = current_month_range(T0).start
    november = datetime(2026, 11, 1, tzinfo=timezone.utc)
    data = _response()
    cache.put("current", data, T0, october)

    assert cache.get("current", T0, october) is data
    assert cache.get("current", T0, november) is None
    assert cache.stale_fallback("current", october) is data
    assert cache.stale_fallback("current", november) is None


def test_month_rollover_within_ttl_refetches():
    client = SlowClient()
    clock = FakeClock(datetime(2026, 10, 31, 23, 50, tzinfo=timezone.utc))
    service = _service(client, clock)

    october = asyncio.run(service.get_leaderboard("current"))
    clock.advance(minutes=15)
    november = asyncio.run(service.get_leaderboard("current"))

    assert client.calls == 2
    assert october.startTime == "2026-10-01T00:00:00.000Z"
    assert november.startTime == "2026-11-01T00:00:00.000Z"


def test_stale_fallback_never_crosses_months():
    client = SlowClient()
    clock = FakeClock(datetime(2026, 10, 20, tzinfo=timezone.utc))
    service = _service(client, clock)
    asyncio.run(service.get_leaderboard("current"))

    clock.now = datetime(2026, 12, 5, tzinfo=timezone.utc)
    client.fail = True
    with pytest.raises(UpstreamError):
        asyncio.run(service.get_leaderboard("current"))


class BadWagerClient:
    def __init__(self):
        self.calls = 0
        self.bad = False

    async def fetch(self, window, query=None):
        self.calls += 1
        wager = "n/a" if self.bad else "125"
        return {"data": [{"username": "strictly", "wagered": wager}]}


def test_strict_parsing_falls_back_to_stale_data():
    client = BadWagerClient()
    clock = FakeClock(T0)
    cache = LeaderboardCache(timedelta(minutes=30), clock=clock)
    service = LeaderboardService(BETBOLT, client, cache, clock=clock, strict_wagers=True)

    good = asyncio.run(service.get_leaderboard("current"))
    clock.advance(hours=1)
    client.bad = True

    assert asyncio.run(service.get_leaderboard("current")) is good
    assert client.calls == 2


def test_strict_parsing_raises_when_nothing_cached():
    client = BadWagerClient()
    client.bad = True
    clock = FakeClock(T0)
    cache = LeaderboardCache(timedelta(minutes=30), clock=clock)
    service = LeaderboardService(BETBOLT, client, cache, clock=clock, strict_wagers=True)

    with pytest.raises(MalformedUpstreamError):
        asyncio.run(service.get_leaderboard("previous"))
