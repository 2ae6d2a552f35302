"""
Pydantic models for leaderboard-related endpoints.
"""
from pydantic import BaseModel, Field
from typing import Any, List, Optional, Union


class LeaderboardEntry(BaseModel):
    """Model for a single ranked participant."""
    name: Optional[Any] = Field(None, description="Masked username (first 2 + *** + last 2)")
    wager: float = Field(..., ge=0, description="Amount wagered in the contest window")
    id: Optional[Any] = Field(None, description="Upstream participant ID, when provided")
    favoriteGameId: Optional[Any] = Field(None, description="Upstream ID of the participant's most played game")
    favoriteGameTitle: Optional[Any] = Field(None, description="Title of the participant's most played game")


class PrizeSlot(BaseModel):
    """Model for a fixed prize position."""
    position: int = Field(..., ge=1, le=10, description="Leaderboard rank the prize is paid to")
    reward: Union[int, float] = Field(..., ge=0, description="Prize amount for the position")


class LeaderboardResponse(BaseModel):
    """Response model for leaderboard endpoints."""
    leaderboard: List[LeaderboardEntry] = Field(..., description="Top 10 entries ordered by wager, highest first")
    prizes: List[PrizeSlot] = Field(..., description="The 10 prize slots, position 1 first")
    startTime: str = Field(..., description="Window start (ISO-8601, UTC)")
    endTime: str = Field(..., description="Window end (ISO-8601, UTC)")


class CountdownResponse(BaseModel):
    """Response model for countdown endpoints."""
    percentageLeft: float = Field(..., ge=0, le=100, description="Percentage of the current month remaining, 2 decimals")


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""
    error: str = Field(..., description="Error message")


class LeaderboardQuery(BaseModel):
    """Optional tuning passed through to the upstream leaderboard call."""
    limit: Optional[int] = Field(None, description="Number of upstream rows (upstream default 100)")
    offset: Optional[int] = Field(None, description="Upstream row offset (upstream default 0)")
    sort_by: Optional[str] = Field(None, description="Upstream sort field (upstream default 'wager')")
    sort_order: Optional[str] = Field(None, description="Upstream sort order (upstream default 'desc')")
    categories: Optional[str] = Field(None, description="Upstream category filter")
