# /app/api/endpoints/rainbet.py
"""
Rainbet leaderboard API endpoints.
"""
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from app.api.deps import get_rainbet_service
from app.models.leaderboard_models import CountdownResponse, ErrorResponse, LeaderboardResponse
from app.services.leaderboard import LeaderboardService
from app.upstream.base import UpstreamError

# Set up logger for this module
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


async def _leaderboard(service: LeaderboardService, period: str, label: str):
    try:
        return await service.get_leaderboard(period)
    except UpstreamError as e:
        logger.error(f"Error fetching {label}: {e}")
        if e.status_code is not None and e.status_code >= 400:
            # forward the partner's own status and message
            return JSONResponse(status_code=e.status_code, content={"error": e.body or str(e)})
        return JSONResponse(status_code=500, content={"error": f"Failed to fetch {label} data"})
    except Exception as e:
        logger.exception(f"Error fetching {label}: {e}")
        return JSONResponse(status_code=500, content={"error": f"Failed to fetch {label} data"})


@router.get(
    "/leaderboard/rainbet",
    summary="Current month Rainbet leaderboard",
    description="Top 10 affiliates by amount wagered this calendar month (UTC), with the prize table.",
    response_model=LeaderboardResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Successfully retrieved leaderboard", "model": LeaderboardResponse},
        500: {"description": "Internal Server Error", "model": ErrorResponse},
    }
)
async def get_rainbet_leaderboard(service: LeaderboardService = Depends(get_rainbet_service)):
    """
    GET endpoint for the current month.

    - Served from cache while fresh; stale cache is served if the refresh fails
    - Non-2xx partner responses are forwarded with the partner's status code
    """
    logger.info("GET /leaderboard/rainbet")
    return await _leaderboard(service, "current", "rainbet leaderboard")


@router.get(
    "/prev-leaderboard/rainbet",
    summary="Previous month Rainbet leaderboard",
    response_model=LeaderboardResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Successfully retrieved leaderboard", "model": LeaderboardResponse},
        500: {"description": "Internal Server Error", "model": ErrorResponse},
    }
)
async def get_previous_rainbet_leaderboard(service: LeaderboardService = Depends(get_rainbet_service)):
    logger.info("GET /prev-leaderboard/rainbet")
    return await _leaderboard(service, "previous", "previous rainbet leaderboard")


@router.get(
    "/countdown/rainbet",
    summary="Time left in the current Rainbet contest",
    response_model=CountdownResponse,
    responses={500: {"description": "Internal Server Error", "model": ErrorResponse}}
)
async def get_rainbet_countdown(service: LeaderboardService = Depends(get_rainbet_service)):
    """Percentage of the current month still remaining."""
    try:
        return service.countdown()
    except Exception as e:
        logger.exception(f"Error calculating countdown: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to calculate countdown"})
