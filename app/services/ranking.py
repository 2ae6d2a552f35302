"""
Normalization and ranking of raw partner payloads.

Partner payloads are trusted only loosely: a missing entries list, a
malformed row or an unparsable wager degrades to an empty list or a zero
wager instead of failing the request, unless strict parsing is enabled.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.models.leaderboard_models import LeaderboardEntry, LeaderboardResponse, PrizeSlot
from app.utils.helpers import mask_username, parse_number_prefix
from app.utils.time_windows import TimeWindow, to_iso

# Set up logger for this module
logger = logging.getLogger(__name__)

TOP_N = 10
PRIZE_SLOTS = 10

RAINBET_PRIZES = (220, 170, 120, 50, 40, 0, 0, 0, 0, 0)
BETBOLT_PRIZES = (1000, 550, 275, 125, 50, 0, 0, 0, 0, 0)

# upstream field -> response field, copied when present
OPTIONAL_FIELDS = (
    ("id", "id"),
    ("favorite_game_id", "favoriteGameId"),
    ("favorite_game_title", "favoriteGameTitle"),
)


class MalformedUpstreamError(ValueError):
    """Raised in strict mode when a partner row carries an unusable wager."""


@dataclass(frozen=True)
class PlatformProfile:
    """Where a platform keeps its rows and what it pays out."""
    name: str
    entries_key: str
    wager_key: str
    prizes: Tuple[int, ...]
    name_key: str = "username"


RAINBET = PlatformProfile(name="rainbet", entries_key="affiliates", wager_key="wagered_amount", prizes=RAINBET_PRIZES)
BETBOLT = PlatformProfile(name="betbolt", entries_key="data", wager_key="wagered", prizes=BETBOLT_PRIZES)


def build_prizes(table: Sequence[float]) -> List[PrizeSlot]:
    if len(table) != PRIZE_SLOTS:
        raise ValueError(f"Prize table must have {PRIZE_SLOTS} slots, got {len(table)}")
    return [PrizeSlot(position=i + 1, reward=reward) for i, reward in enumerate(table)]


def parse_wager(value: Any, strict: bool = False) -> float:
    """
    Parse an upstream wager amount.

    Numbers pass through and strings are read up to their leading numeric
    part ("12.5 USD" -> 12.5). Anything else, including NaN, infinities and
    negative amounts, is 0.0, or raises MalformedUpstreamError when strict.
    """
    parsed: Optional[float] = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            parsed = None
    elif isinstance(value, str):
        parsed = parse_number_prefix(value)

    if parsed is None or not math.isfinite(parsed) or parsed < 0:
        if strict:
            raise MalformedUpstreamError(f"Unusable wager value: {value!r}")
        return 0.0
    return parsed


def _to_entry(row: Dict[str, Any], profile: PlatformProfile, strict: bool) -> LeaderboardEntry:
    fields = {
        "name": mask_username(row.get(profile.name_key)),
        "wager": parse_wager(row.get(profile.wager_key), strict=strict),
    }
    for source, target in OPTIONAL_FIELDS:
        if row.get(source) is not None:
            fields[target] = row[source]
    return LeaderboardEntry(**fields)


def normalize(
    payload: Any,
    window: TimeWindow,
    profile: PlatformProfile,
    strict: bool = False,
) -> LeaderboardResponse:
    """
    Turn a raw partner payload into a ranked, prize-paired leaderboard.

    Args:
        payload: Parsed JSON body returned by the partner
        window: Contest window the payload was fetched for
        profile: Platform field mapping and prize table
        strict: Raise on unusable wagers instead of counting them as zero

    Returns:
        LeaderboardResponse with at most TOP_N entries and exactly 10 prizes
    """
    rows = payload.get(profile.entries_key) if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        logger.warning(f"[{profile.name}] '{profile.entries_key}' missing or not a list, using empty leaderboard")
        rows = []

    entries = []
    for row in rows:
        if not isinstance(row, dict):
            if strict:
                raise MalformedUpstreamError(f"Unusable row: {row!r}")
            logger.warning(f"[{profile.name}] Skipping malformed row: {row!r}")
            continue
        entries.append(_to_entry(row, profile, strict))

    # sorted() is stable, so equal wagers keep the partner's order
    ranked = sorted(entries, key=lambda e: e.wager, reverse=True)[:TOP_N]

    return LeaderboardResponse(
        leaderboard=ranked,
        prizes=build_prizes(profile.prizes),
        startTime=to_iso(window.start),
        endTime=to_iso(window.end),
    )
