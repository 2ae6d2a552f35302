# /app/main.py
"""
Main application module for the API.
This is the entry point that initializes the FastAPI app and includes all routes.
"""
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app import config
from app.api.router import router
from app.services.leaderboard import build_betbolt_service, build_rainbet_service

# Logging setup - direct to stdout
logging.basicConfig(
    level=config.LOG_LEVEL,
    stream=sys.stdout,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    force=True  # Override any previous configuration
)

logger = logging.getLogger(__name__)

# Keep httpx request logging out of the way; the clients log their own calls
logging.getLogger("httpx").setLevel(logging.WARNING)

# Initialize FastAPI
app = FastAPI(
    title="Wager Leaderboard API",
    description="Monthly wager leaderboards aggregated from Rainbet and Betbolt"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Build the per-platform services and their caches when the app starts up"""
    logger.info("=== API STARTING UP ===")

    app.state.rainbet_service = build_rainbet_service()
    app.state.betbolt_service = build_betbolt_service()

    if not config.RAINBET_API_KEY:
        logger.warning("RAINBET_API_KEY not configured - Rainbet endpoints will fail until it is set")
    if not config.BETBOLT_SECRET:
        logger.warning("BETBOLT_SECRET not configured - Betbolt endpoints will fail until it is set")

    logger.info(f"Rainbet cache duration: {config.RAINBET_CACHE_TTL_SECONDS / 60:g} minutes")
    logger.info(f"Betbolt cache duration: {config.BETBOLT_CACHE_TTL_SECONDS / 60:g} minutes")
    logger.info("=== API READY ===")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"error": "Invalid query parameters"})


# Root endpoint
@app.get("/")
async def root():
    return {"message": "Wager Leaderboard API is running"}

# Include all routes with api prefix
app.include_router(router, prefix="/api")
