"""
Leaderboard service: fetch, normalize, cache and fall back to stale data.

The same policy applies to every platform; only the TTL differs, sized to
each partner's rate budget.
"""
import logging
from datetime import timedelta
from typing import Any, Dict, Optional, Protocol

import httpx

from app import config
from app.models.leaderboard_models import LeaderboardQuery, LeaderboardResponse
from app.services.cache import Clock, LeaderboardCache, utc_now
from app.services.ranking import BETBOLT, RAINBET, MalformedUpstreamError, PlatformProfile, normalize
from app.upstream.base import UpstreamError
from app.upstream.betbolt import BetboltClient
from app.upstream.rainbet import RainbetClient
from app.utils.time_windows import TimeWindow, current_month_range, percentage_left, previous_month_range

# Set up logger for this module
logger = logging.getLogger(__name__)

PERIODS = {
    "current": current_month_range,
    "previous": previous_month_range,
}


class LeaderboardClient(Protocol):
    async def fetch(self, window: TimeWindow, query: Optional[LeaderboardQuery] = None) -> Any:
        ...


class LeaderboardService:
    """Serves one platform's current and previous month leaderboards."""

    def __init__(
        self,
        profile: PlatformProfile,
        client: LeaderboardClient,
        cache: LeaderboardCache,
        clock: Optional[Clock] = None,
        strict_wagers: bool = False,
    ):
        self.profile = profile
        self.client = client
        self.cache = cache
        self.clock = clock or utc_now
        self.strict_wagers = strict_wagers

    @property
    def label(self) -> str:
        return self.profile.name.upper()

    def window(self, period: str) -> TimeWindow:
        """Recomputed on every call so the month rolls over with the wall clock."""
        if period not in PERIODS:
            raise KeyError(f"Unknown period '{period}'")
        return PERIODS[period](self.clock())

    async def get_leaderboard(self, period: str, query: Optional[LeaderboardQuery] = None) -> LeaderboardResponse:
        """
        Cached leaderboard for the period, refreshed once the TTL expires.

        Raises:
            UpstreamError, MalformedUpstreamError: when the refresh fails and
            nothing has ever been cached for the period
        """
        now = self.clock()
        window = self.window(period)
        cached = self.cache.get(period, now, window.start)
        if cached is not None:
            logger.info(f"[{self.label}] Serving from cache ({period} month)")
            return cached

        async with self.cache.lock(period):
            # another request may have refreshed the slot while we waited
            cached = self.cache.get(period, self.clock(), window.start)
            if cached is not None:
                logger.info(f"[{self.label}] Serving from cache ({period} month)")
                return cached

            logger.info(f"[{self.label}] Cache expired or empty, fetching fresh data ({period} month)")
            try:
                payload = await self.client.fetch(window, query)
                data = normalize(payload, window, self.profile, strict=self.strict_wagers)
            except (UpstreamError, MalformedUpstreamError) as e:
                stale = self.cache.stale_fallback(period, window.start)
                if stale is None:
                    raise
                logger.warning(
                    f"[{self.label}] Error occurred, serving stale cache ({period} month, "
                    f"age {self.cache.age(period, self.clock())}): {e}"
                )
                return stale

            self.cache.put(period, data, self.clock(), window.start)
            return data

    def countdown(self) -> Dict[str, float]:
        return {"percentageLeft": percentage_left(self.window("current"), self.clock())}


def build_rainbet_service(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Clock] = None,
) -> LeaderboardService:
    client = RainbetClient(
        config.RAINBET_API_KEY,
        config.RAINBET_API_URL,
        timeout=config.UPSTREAM_TIMEOUT_SECONDS,
        transport=transport,
    )
    cache = LeaderboardCache(timedelta(seconds=config.RAINBET_CACHE_TTL_SECONDS), clock=clock)
    return LeaderboardService(RAINBET, client, cache, clock=clock, strict_wagers=config.STRICT_WAGER_PARSING)


def build_betbolt_service(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Clock] = None,
) -> LeaderboardService:
    client = BetboltClient(
        config.BETBOLT_SECRET,
        config.BETBOLT_API_URL,
        timeout=config.UPSTREAM_TIMEOUT_SECONDS,
        transport=transport,
    )
    cache = LeaderboardCache(timedelta(seconds=config.BETBOLT_CACHE_TTL_SECONDS), clock=clock)
    return LeaderboardService(BETBOLT, client, cache, clock=clock, strict_wagers=config.STRICT_WAGER_PARSING)
