"""
Game title matching against the Steam app list.

Resolves free-text titles to catalog entries: an exact lookup on
normalized names first, then fuzzy scoring with rapidfuzz.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from rapidfuzz import fuzz, process

from steam_client.contracts import CatalogEntry
from steam_client.infrastructure.cache import TTLCache
from steam_client.logger import get_logger
from steam_client.matching.normalizer import normalize_title

APP_LIST_CACHE_KEY = "steam_app_list"
APP_LIST_TTL_MS = 86_400_000  # 24 hours


class CatalogSource(Protocol):
    """Anything that can fetch the raw Steam app list."""

    async def fetch_catalog(self) -> list[dict[str, Any]]:
        """Return rows with ``appid`` and ``name`` keys."""
        ...


@dataclass(frozen=True)
class SearchIndex:
    """
    Lookup structures derived from one catalog snapshot.

    ``names`` and ``entries`` are parallel lists in catalog order;
    ``by_name`` maps a normalized name to the first entry carrying it.
    """

    catalog: list[CatalogEntry]
    names: list[str] = field(default_factory=list)
    entries: list[CatalogEntry] = field(default_factory=list)
    by_name: dict[str, CatalogEntry] = field(default_factory=dict)

    @classmethod
    def build(cls, catalog: list[CatalogEntry]) -> "SearchIndex":
        index = cls(catalog=catalog)
        for entry in catalog:
            name = normalize_title(entry.name)
            if not name:
                continue
            index.names.append(name)
            index.entries.append(entry)
            index.by_name.setdefault(name, entry)
        return index


class GameMatcher:
    """
    Handles exact and fuzzy game matching using the Steam app list.

    The app list is read through the (borrowed) cache; the search index
    is rebuilt whenever the cached snapshot changes.

    Example:
        >>> matcher = GameMatcher(api_client, app_list_cache)
        >>> game = await matcher.find_best_match("Cyberpunk 2077", 0.3)
        >>> if game:
        ...     print(game.name, game.match_score)
    """

    def __init__(
        self,
        source: CatalogSource,
        app_list_cache: TTLCache[str, list[CatalogEntry]],
    ) -> None:
        self._source = source
        self._app_list_cache = app_list_cache
        self._index: SearchIndex | None = None
        self._logger = get_logger(__name__, component="matcher")

    async def get_exact_match(self, title: str) -> CatalogEntry | None:
        """
        Get exact match by normalized title.

        Args:
            title: Game title

        Returns:
            CatalogEntry if a catalog name normalizes to the same string, else None

        Raises:
            RateLimitError: If rate limit exceeded when fetching the app list
            SteamApiError: If the app list request fails
        """
        normalized = normalize_title(title)
        if not normalized:
            return None

        index = await self._get_index()
        return index.by_name.get(normalized)

    async def find_best_match(self, title: str, threshold: float) -> CatalogEntry | None:
        """
        Find the best matching game.

        Args:
            title: Game title to search
            threshold: Maximum distance accepted (0 = exact, 1 = anything)

        Returns:
            Best match with its ``match_score``, or None
        """
        if not normalize_title(title):
            return None

        exact = await self.get_exact_match(title)
        if exact is not None:
            self._logger.debug("Exact match found", title=title, app_id=exact.app_id)
            return exact.with_score(1.0)

        matches = await self.find_matches(title, 1, threshold)
        return matches[0] if matches else None

    async def find_matches(
        self,
        title: str,
        limit: int,
        threshold: float,
    ) -> list[CatalogEntry]:
        """
        Find multiple matching games by fuzzy score.

        Args:
            title: Game title to search
            limit: Maximum number of results
            threshold: Maximum distance accepted (0 = exact, 1 = anything)

        Returns:
            list[CatalogEntry]: Matches sorted best first, ties in catalog order
        """
        normalized = normalize_title(title)
        if not normalized or limit <= 0:
            return []

        index = await self._get_index()
        if not index.names:
            return []

        results = process.extract(
            normalized,
            index.names,
            scorer=fuzz.WRatio,
            limit=None,
            score_cutoff=max(0.0, 100.0 * (1.0 - threshold)),
        )
        # Scores exactly at the cutoff are kept
        results.sort(key=lambda result: (-result[1], result[2]))

        matches = [
            index.entries[position].with_score(score / 100.0)
            for _, score, position in results[:limit]
        ]

        self._logger.debug(
            "Fuzzy search complete",
            title=title,
            candidates=len(results),
            returned=len(matches),
        )
        return matches

    def invalidate_index(self) -> None:
        """Drop the search index so it is rebuilt on next use."""
        self._index = None

    async def _get_index(self) -> SearchIndex:
        catalog = await self._get_app_list()
        if self._index is None or self._index.catalog is not catalog:
            self._index = SearchIndex.build(catalog)
            self._logger.info(
                "Search index built",
                catalog_size=len(catalog),
                indexed=len(self._index.names),
            )
        return self._index

    async def _get_app_list(self) -> list[CatalogEntry]:
        """
        Get the Steam app list from cache or API.

        Raises:
            RateLimitError: If rate limit exceeded
            SteamApiError: If API request fails
        """
        cached = self._app_list_cache.get(APP_LIST_CACHE_KEY)
        if cached is not None:
            return cached

        raw_apps = await self._source.fetch_catalog()
        app_list = [
            CatalogEntry(app_id=str(app["appid"]), name=app.get("name") or "")
            for app in raw_apps
        ]

        self._app_list_cache.set(APP_LIST_CACHE_KEY, app_list, APP_LIST_TTL_MS)
        self._logger.info("App list cached", total_apps=len(app_list))
        return app_list
