"""
Betbolt referral leaderboard client.
"""
import logging
from typing import Any, Optional

import httpx

from app.models.leaderboard_models import LeaderboardQuery
from app.upstream.base import UpstreamError, get_json
from app.utils.time_windows import TimeWindow, to_iso

# Set up logger for this module
logger = logging.getLogger(__name__)

PLATFORM = "BETBOLT"
ENTRIES_KEY = "data"

DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0
DEFAULT_SORT_BY = "wager"
DEFAULT_SORT_ORDER = "desc"


class BetboltClient:
    """Fetches referral wager rankings, authenticated with a bearer secret."""

    def __init__(
        self,
        secret: Optional[str],
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret = secret
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, window: TimeWindow, query: Optional[LeaderboardQuery] = None) -> Any:
        if not self.secret:
            logger.error("BETBOLT_SECRET not configured")
            raise UpstreamError("Betbolt secret not configured")

        query = query or LeaderboardQuery()
        params = {
            "limit": query.limit if query.limit is not None else DEFAULT_LIMIT,
            "offset": query.offset if query.offset is not None else DEFAULT_OFFSET,
            "start_date": to_iso(window.start),
            "end_date": to_iso(window.end),
            "sort_by": query.sort_by or DEFAULT_SORT_BY,
            "sort_order": query.sort_order or DEFAULT_SORT_ORDER,
        }
        if query.categories:
            params["categories"] = query.categories

        return await get_json(
            PLATFORM,
            self.base_url,
            params,
            ENTRIES_KEY,
            headers={"Authorization": f"Bearer {self.secret}"},
            timeout=self.timeout,
            transport=self.transport,
        )
