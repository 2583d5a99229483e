"""
Catalog entries and search-facing types.
"""

from pydantic import BaseModel, ConfigDict, Field


class CatalogEntry(BaseModel):
    """
    Basic Steam game information from the app list or a search.

    ``match_score`` is only set by the matcher: 1.0 for an exact
    match, ``1 - distance`` for a fuzzy one.
    """

    model_config = ConfigDict(frozen=True)

    app_id: str = Field(..., description="Steam application ID")
    name: str = Field(..., description="Game title")
    match_score: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Match confidence (higher = better)"
    )

    def with_score(self, score: float) -> "CatalogEntry":
        """Return a copy carrying the given match score."""
        return self.model_copy(update={"match_score": score})


class SearchOptions(BaseModel):
    """Options for single-game searches."""

    fuzzy_threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Maximum fuzzy distance (None = client default)",
    )
    include_adult: bool = Field(default=False, description="Keep adult games in results")
    bypass_cache: bool = Field(
        default=False, description="Fetch fresh details instead of using the details cache"
    )


class CacheStats(BaseModel):
    """Combined statistics for the client's caches."""

    app_list_size: int = Field(..., ge=0, description="Entries in the app list cache")
    details_cache_size: int = Field(..., ge=0, description="Entries in the details cache")
    hit_rate: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Approximate combined hit rate, weighted by entry count",
    )
