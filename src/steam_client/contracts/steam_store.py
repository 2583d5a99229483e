"""
Data contracts for Steam Store API responses.

These Pydantic models define the expected structure of data
from the Store ``appdetails`` endpoint. Details are cached and
shared between callers, so every model here is frozen.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class PriceOverview(_FrozenModel):
    """Price information for a game."""

    currency: str = Field(..., description="Currency code (e.g., USD, EUR)")
    initial: int = Field(..., description="Initial price in cents")
    final: int = Field(..., description="Final price in cents (after discount)")
    discount_percent: int = Field(default=0, ge=0, le=100, description="Discount percentage")
    initial_formatted: str = Field(default="", description="Formatted initial price")
    final_formatted: str = Field(default="", description="Formatted final price")

    @property
    def initial_dollars(self) -> Decimal:
        """Convert initial price from cents to dollars."""
        return Decimal(self.initial) / 100

    @property
    def final_dollars(self) -> Decimal:
        """Convert final price from cents to dollars."""
        return Decimal(self.final) / 100


class ReleaseDate(_FrozenModel):
    """Release date information."""

    coming_soon: bool = Field(default=False, description="Whether the game is not yet released")
    date: str = Field(default="", description="Release date string (e.g., 'Dec 10, 2020')")


class Category(_FrozenModel):
    """Game category (e.g., Single-player)."""

    id: int
    description: str


class Genre(_FrozenModel):
    """Game genre (e.g., Action)."""

    id: str
    description: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)


class Screenshot(_FrozenModel):
    """Game screenshot."""

    id: int
    path_thumbnail: str
    path_full: str


class Metacritic(_FrozenModel):
    """Metacritic score information."""

    score: int = Field(..., ge=0, le=100)
    url: str = Field(default="")


class Recommendations(_FrozenModel):
    """User recommendation count."""

    total: int = Field(default=0, ge=0)


class ContentDescriptors(_FrozenModel):
    """Content descriptors (3 = Adult Only Sexual Content)."""

    ids: list[int] = Field(default_factory=list)
    notes: str | None = None

    @field_validator("ids", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class SteamGameDetails(_FrozenModel):
    """
    Complete game data from the Steam Store API.

    Built from the ``data`` object of an /appdetails response, keyed by
    the app id that was requested.
    """

    # Identifiers
    app_id: str = Field(..., description="Steam application ID")
    name: str = Field(default="", description="Game name")
    type: str = Field(default="game", description="Type: game, dlc, demo, etc.")

    # Classification
    required_age: int = Field(default=0, description="Required minimum age")
    is_free: bool = Field(default=False, description="Whether the game is free")

    # Description
    detailed_description: str = Field(default="", description="Full description (HTML)")
    short_description: str = Field(default="", description="Brief description")
    header_image: str = Field(default="", description="Header image URL")

    publishers: list[str] = Field(default_factory=list)
    developers: list[str] = Field(default_factory=list)

    # Pricing (free games don't have this)
    price_overview: PriceOverview | None = Field(
        default=None, description="Price info (None for free games)"
    )

    release_date: ReleaseDate = Field(default_factory=ReleaseDate)
    categories: list[Category] = Field(default_factory=list)
    genres: list[Genre] = Field(default_factory=list)
    screenshots: list[Screenshot] = Field(default_factory=list)

    # Ratings
    metacritic: Metacritic | None = Field(default=None)
    recommendations: Recommendations | None = Field(default=None)

    content_descriptors: ContentDescriptors = Field(default_factory=ContentDescriptors)

    @field_validator("app_id", mode="before")
    @classmethod
    def coerce_app_id(cls, v: Any) -> str:
        return str(v)

    @field_validator("required_age", mode="before")
    @classmethod
    def coerce_required_age(cls, v: Any) -> int:
        """Convert required_age to int (API sometimes returns string)."""
        if v is None:
            return 0
        if isinstance(v, str):
            return int(v) if v.isdigit() else 0
        return int(v)

    @field_validator(
        "name",
        "detailed_description",
        "short_description",
        "header_image",
        mode="before",
    )
    @classmethod
    def none_to_empty_string(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator(
        "publishers",
        "developers",
        "categories",
        "genres",
        "screenshots",
        mode="before",
    )
    @classmethod
    def none_to_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("release_date", "content_descriptors", mode="before")
    @classmethod
    def none_to_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @classmethod
    def from_store_payload(cls, app_id: str, data: dict[str, Any]) -> "SteamGameDetails":
        """Build details from the raw ``data`` object of an /appdetails entry."""
        return cls.model_validate({**data, "app_id": app_id})

    @property
    def genre_names(self) -> list[str]:
        """Extract genre names as simple list."""
        return [g.description for g in self.genres]

    @property
    def category_names(self) -> list[str]:
        """Extract category names as simple list."""
        return [c.description for c in self.categories]

    @property
    def store_url(self) -> str:
        """Steam store page URL."""
        return f"https://store.steampowered.com/app/{self.app_id}/"
