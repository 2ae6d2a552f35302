# /app/config.py
"""
Configuration settings for the application.
Loads environment variables and provides them throughout the app.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv(override=True)


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Server settings
PORT = int(os.getenv("PORT", "3000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Upstream endpoints
RAINBET_API_URL = os.getenv("RAINBET_API_URL", "https://services.rainbet.com/v1/external/affiliates")
BETBOLT_API_URL = os.getenv("BETBOLT_API_URL", "https://openapi.betbolt.com/v1/referral/leaderboard")
UPSTREAM_TIMEOUT_SECONDS = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

# API Keys
RAINBET_API_KEY = os.getenv("RAINBET_API_KEY")
BETBOLT_SECRET = os.getenv("BETBOLT_SECRET")

# Cache durations, sized to each platform's rate budget
RAINBET_CACHE_TTL_SECONDS = int(os.getenv("RAINBET_CACHE_TTL_SECONDS", "300"))
BETBOLT_CACHE_TTL_SECONDS = int(os.getenv("BETBOLT_CACHE_TTL_SECONDS", "1800"))

# Reject non-numeric wagers instead of counting them as zero
STRICT_WAGER_PARSING = _get_bool("STRICT_WAGER_PARSING")
