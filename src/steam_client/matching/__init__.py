"""
Title matching against the Steam catalog.
"""

from steam_client.matching.matcher import CatalogSource, GameMatcher, SearchIndex
from steam_client.matching.normalizer import normalize_title

__all__ = [
    "CatalogSource",
    "GameMatcher",
    "SearchIndex",
    "normalize_title",
]
