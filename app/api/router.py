"""
API router that includes all endpoint routers.
"""
from fastapi import APIRouter
from app.api.endpoints import (
    rainbet,
    betbolt
)

# Create main router
router = APIRouter()

# Include all endpoint routers
router.include_router(rainbet.router, tags=["Rainbet"])
router.include_router(betbolt.router, tags=["Betbolt"])
