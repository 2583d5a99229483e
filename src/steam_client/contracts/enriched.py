"""
Enriched and simplified game metadata.
"""

from pydantic import BaseModel, Field


class SteamRating(BaseModel):
    """Steam user rating."""

    percent: int = Field(..., ge=0, le=100, description="Positive review percentage")
    total: int = Field(..., ge=0, description="Total number of ratings")


class Rating(BaseModel):
    """Combined rating information."""

    metacritic: int | None = Field(default=None, description="Metacritic score (0-100)")
    steam: SteamRating | None = None


class PartialGameData(BaseModel):
    """Partial game data for enrichment input."""

    title: str
    steam_id: str | None = Field(default=None, description="Steam app ID if already known")


class EnrichedGameData(BaseModel):
    """Enriched game data output."""

    steam_id: str | None = None
    steam_url: str | None = None
    cover_url: str | None = Field(default=None, description="Header image URL (460x215)")
    price: str | None = Field(default=None, description="e.g. '$59.99' or 'Free to Play'")
    release_date: str | None = Field(default=None, description="e.g. 'Dec 10, 2020'")
    categories: list[str] = Field(default_factory=list, description="Genre then category names")
    rating: Rating | None = None
    screenshots: list[str] = Field(default_factory=list, description="Full-size screenshot URLs")
    is_adult: bool = False
