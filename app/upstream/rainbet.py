"""
Rainbet affiliate summary client.
"""
import logging
from typing import Any, Optional

import httpx

from app.models.leaderboard_models import LeaderboardQuery
from app.upstream.base import UpstreamError, get_json
from app.utils.time_windows import TimeWindow, to_date

# Set up logger for this module
logger = logging.getLogger(__name__)

PLATFORM = "RAINBET"
ENTRIES_KEY = "affiliates"


class RainbetClient:
    """Fetches per-affiliate wager totals for a date range."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, window: TimeWindow, query: Optional[LeaderboardQuery] = None) -> Any:
        """
        Fetch the affiliate summary for the window's dates.

        The endpoint only filters by date; sorting and limits are applied
        locally, so any tuning query is ignored.
        """
        if not self.api_key:
            logger.error("RAINBET_API_KEY not configured")
            raise UpstreamError("Rainbet API key not configured")

        if query is not None and query.model_dump(exclude_none=True):
            logger.debug(f"[{PLATFORM} API] Ignoring unsupported tuning params: {query}")

        params = {
            "start_at": to_date(window.start),
            "end_at": to_date(window.end),
            "key": self.api_key,
        }
        return await get_json(
            PLATFORM,
            self.base_url,
            params,
            ENTRIES_KEY,
            timeout=self.timeout,
            transport=self.transport,
        )
