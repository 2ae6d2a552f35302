from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_betbolt_service, get_rainbet_service
from app.main import app
from app.services.cache import LeaderboardCache
from app.services.leaderboard import LeaderboardService
from app.services.ranking import BETBOLT, RAINBET
from app.upstream.betbolt import BetboltClient
from app.upstream.rainbet import RainbetClient
from tests.fakes import BETBOLT_URL, RAINBET_URL, FakeClock, FakeUpstream


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def rainbet_upstream() -> FakeUpstream:
    return FakeUpstream({"affiliates": []})


@pytest.fixture
def betbolt_upstream() -> FakeUpstream:
    return FakeUpstream({"data": []})


@pytest.fixture
def rainbet_service(rainbet_upstream, clock) -> LeaderboardService:
    client = RainbetClient("test-key", RAINBET_URL, transport=rainbet_upstream.transport)
    cache = LeaderboardCache(timedelta(minutes=5), clock=clock)
    return LeaderboardService(RAINBET, client, cache, clock=clock)


@pytest.fixture
def betbolt_service(betbolt_upstream, clock) -> LeaderboardService:
    client = BetboltClient("test-secret", BETBOLT_URL, transport=betbolt_upstream.transport)
    cache = LeaderboardCache(timedelta(minutes=30), clock=clock)
    return LeaderboardService(BETBOLT, client, cache, clock=clock)


@pytest.fixture
def api(rainbet_service, betbolt_service):
    app.dependency_overrides[get_rainbet_service] = lambda: rainbet_service
    app.dependency_overrides[get_betbolt_service] = lambda: betbolt_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
