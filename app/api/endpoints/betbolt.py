# /app/api/endpoints/betbolt.py
"""
Betbolt leaderboard API endpoints.

Betbolt allows only a handful of calls per hour, so responses are cached
per period and served stale when a refresh fails.
"""
import logging
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from app.api.deps import get_betbolt_service
from app.models.leaderboard_models import CountdownResponse, ErrorResponse, LeaderboardQuery, LeaderboardResponse
from app.services.leaderboard import LeaderboardService
from typing import Optional

# Set up logger for this module
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


def leaderboard_query(
    limit: Optional[int] = Query(None, description="Number of upstream rows (default 100)"),
    offset: Optional[int] = Query(None, description="Upstream row offset (default 0)"),
    sort_by: Optional[str] = Query(None, description="Upstream sort field (default 'wager')"),
    sort_order: Optional[str] = Query(None, description="Upstream sort order (default 'desc')"),
    categories: Optional[str] = Query(None, description="Upstream category filter"),
) -> LeaderboardQuery:
    return LeaderboardQuery(
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
        categories=categories,
    )


async def _leaderboard(service: LeaderboardService, period: str, query: LeaderboardQuery, label: str):
    try:
        return await service.get_leaderboard(period, query)
    except Exception as e:
        logger.error(f"Error fetching {label}: {e}")
        return JSONResponse(status_code=500, content={"error": f"Failed to fetch {label} data"})


@router.get(
    "/leaderboard/betbolt",
    summary="Current month Betbolt leaderboard",
    description="Top 10 referrals by amount wagered this calendar month (UTC), with the prize table.",
    response_model=LeaderboardResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Leaderboard, possibly served from cache", "model": LeaderboardResponse},
        500: {"description": "Upstream failed and nothing is cached", "model": ErrorResponse},
    }
)
async def get_betbolt_leaderboard(
    query: LeaderboardQuery = Depends(leaderboard_query),
    service: LeaderboardService = Depends(get_betbolt_service),
):
    """
    GET endpoint for the current month.

    - Tuning parameters are forwarded to Betbolt on a cache miss
    - The cache is keyed by period only
    """
    logger.info(f"GET /leaderboard/betbolt - {query.model_dump(exclude_none=True)}")
    return await _leaderboard(service, "current", query, "Betbolt leaderboard")


@router.get(
    "/prev-leaderboard/betbolt",
    summary="Previous month Betbolt leaderboard",
    response_model=LeaderboardResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Leaderboard, possibly served from cache", "model": LeaderboardResponse},
        500: {"description": "Upstream failed and nothing is cached", "model": ErrorResponse},
    }
)
async def get_previous_betbolt_leaderboard(
    query: LeaderboardQuery = Depends(leaderboard_query),
    service: LeaderboardService = Depends(get_betbolt_service),
):
    logger.info(f"GET /prev-leaderboard/betbolt - {query.model_dump(exclude_none=True)}")
    return await _leaderboard(service, "previous", query, "previous Betbolt leaderboard")


@router.get(
    "/countdown/betbolt",
    summary="Time left in the current Betbolt contest",
    response_model=CountdownResponse,
    responses={500: {"description": "Internal Server Error", "model": ErrorResponse}}
)
async def get_betbolt_countdown(service: LeaderboardService = Depends(get_betbolt_service)):
    try:
        return service.countdown()
    except Exception as e:
        logger.exception(f"Error calculating countdown: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to calculate countdown"})
