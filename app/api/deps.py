"""
Dependencies shared by the endpoint routers.
"""
from fastapi import Request

from app.services.leaderboard import LeaderboardService


def get_rainbet_service(request: Request) -> LeaderboardService:
    return request.app.state.rainbet_service


def get_betbolt_service(request: Request) -> LeaderboardService:
    return request.app.state.betbolt_service
