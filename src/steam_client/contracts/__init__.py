"""
Data contracts for the Steam client.

Pydantic models for Steam API payloads, catalog entries, search
options and the enriched records handed back to callers.
"""

from steam_client.contracts.catalog import CacheStats, CatalogEntry, SearchOptions
from steam_client.contracts.enriched import (
    EnrichedGameData,
    PartialGameData,
    Rating,
    SteamRating,
)
from steam_client.contracts.steam_reviews import ReviewStats
from steam_client.contracts.steam_store import (
    Category,
    ContentDescriptors,
    Genre,
    Metacritic,
    PriceOverview,
    Recommendations,
    ReleaseDate,
    Screenshot,
    SteamGameDetails,
)

__all__ = [
    "CacheStats",
    "CatalogEntry",
    "Category",
    "ContentDescriptors",
    "EnrichedGameData",
    "Genre",
    "Metacritic",
    "PartialGameData",
    "PriceOverview",
    "Rating",
    "Recommendations",
    "ReleaseDate",
    "ReviewStats",
    "Screenshot",
    "SearchOptions",
    "SteamGameDetails",
    "SteamRating",
]
