"""
Steam client facade.

Composes the API client, caches, matcher and metadata services into
the operations consumers use: search, details, enrichment and cache
management.
"""

from typing import Any

from steam_client.config import SteamClientConfig, get_settings
from steam_client.contracts import (
    CacheStats,
    CatalogEntry,
    EnrichedGameData,
    PartialGameData,
    SearchOptions,
    SteamGameDetails,
)
from steam_client.errors import GameNotFoundError, SteamClientError
from steam_client.infrastructure.api_client import ApiClient
from steam_client.infrastructure.cache import TTLCache
from steam_client.logger import get_logger
from steam_client.matching.matcher import APP_LIST_TTL_MS, GameMatcher
from steam_client.services.adult_content import AdultContentDetector
from steam_client.services.metadata import DEFAULT_SCREENSHOT_LIMIT, MetadataExtractor

DEFAULT_SEARCH_LIMIT = 5


class SteamClient:
    """
    Main Steam client for game search, metadata enrichment, and caching.

    Each instance owns its caches and rate limiter; nothing is shared
    between instances.

    Example:
        >>> async with SteamClient(SteamClientConfig(api_key="...")) as steam:
        ...     game = await steam.search_game("Cyberpunk 2077")
        ...     enriched = await steam.enrich_metadata(PartialGameData(title="Hades"))
    """

    def __init__(
        self,
        config: SteamClientConfig | None = None,
        *,
        api_client: ApiClient | None = None,
    ) -> None:
        """
        Initialize the Steam client.

        Args:
            config: Client configuration (loaded from environment if None)
            api_client: Custom API client (built from config if None)
        """
        self._config = config or get_settings().steam
        self._api_client = api_client or ApiClient(self._config)

        # Single entry for the whole app list, details get the configured TTL
        self._app_list_cache: TTLCache[str, list[CatalogEntry]] = TTLCache(1, APP_LIST_TTL_MS)
        self._details_cache: TTLCache[str, SteamGameDetails] = TTLCache(
            self._config.cache_size,
            self._config.cache_ttl_ms,
        )

        self._matcher = GameMatcher(self._api_client, self._app_list_cache)
        self._metadata_extractor = MetadataExtractor()
        self._adult_content_detector = AdultContentDetector()
        self._logger = get_logger(__name__, component="steam_client")

    @property
    def api_client(self) -> ApiClient:
        return self._api_client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._api_client.close()

    async def __aenter__(self) -> "SteamClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def search_game(
        self,
        title: str,
        options: SearchOptions | None = None,
    ) -> CatalogEntry | None:
        """
        Search for a game on Steam by title.

        Tries an exact match first, then fuzzy matching. Adult games are
        filtered out unless ``options.include_adult`` is set.

        Args:
            title: Game title to search for
            options: Search options (fuzzy threshold, adult filter, cache bypass)

        Returns:
            Best match with ``match_score``, or None

        Raises:
            RateLimitError: If Steam API rate limit is exceeded
            SteamApiError: If the app list request fails
        """
        opts = options or SearchOptions()
        threshold = (
            opts.fuzzy_threshold
            if opts.fuzzy_threshold is not None
            else self._config.default_fuzzy_threshold
        )

        match = await self._matcher.find_best_match(title, threshold)
        if match is None:
            self._logger.debug("No match found", title=title, threshold=threshold)
            return None

        if not opts.include_adult and await self.is_adult_content(
            match, bypass_cache=opts.bypass_cache
        ):
            self._logger.info("Filtered adult match", title=title, app_id=match.app_id)
            return None

        return match

    async def search_games(
        self,
        title: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> list[CatalogEntry]:
        """
        Search for multiple games matching a title, best first.

        Raises:
            RateLimitError: If Steam API rate limit is exceeded
            SteamApiError: If the app list request fails
        """
        return await self._matcher.find_matches(
            title, limit, self._config.default_fuzzy_threshold
        )

    async def get_game_details(
        self,
        app_id: str,
        *,
        bypass_cache: bool = False,
    ) -> SteamGameDetails:
        """
        Get detailed game information, cache first.

        Args:
            app_id: Steam application ID
            bypass_cache: Always fetch fresh details (and refresh the cache)

        Raises:
            RateLimitError: If Steam API rate limit is exceeded
            GameNotFoundError: If the app does not exist
            SteamApiError: If the request fails
        """
        if not bypass_cache:
            cached = self._details_cache.get(app_id)
            if cached is not None:
                return cached

        details = await self._api_client.fetch_game_details(app_id)
        self._details_cache.set(app_id, details)
        return details

    async def enrich_metadata(self, partial_game: PartialGameData) -> EnrichedGameData:
        """
        Enrich partial game data with Steam metadata.

        Adult games are not rejected here; the result reports ``is_adult``.

        Args:
            partial_game: Title and optional Steam ID

        Returns:
            EnrichedGameData: Price, release date, categories, ratings, screenshots

        Raises:
            GameNotFoundError: If no Steam ID is given and nothing matches the title
            RateLimitError: If Steam API rate limit is exceeded
            SteamApiError: If a request fails
        """
        app_id = partial_game.steam_id

        if not app_id:
            match = await self.search_game(
                partial_game.title,
                SearchOptions(include_adult=True),
            )
            if match is None:
                raise GameNotFoundError(partial_game.title)
            app_id = match.app_id

        details = await self.get_game_details(app_id)
        review_stats = await self._api_client.fetch_review_stats(app_id)

        enriched = self._metadata_extractor.extract_metadata(details, review_stats)
        enriched.is_adult = self._adult_content_detector.is_adult(details)

        self._logger.info(
            "Enriched game metadata",
            title=partial_game.title,
            app_id=app_id,
            is_adult=enriched.is_adult,
        )
        return enriched

    async def is_adult_content(self, game: CatalogEntry, *, bypass_cache: bool = False) -> bool:
        """
        Check if a game contains adult content.

        Fails open: if details cannot be fetched, the game is treated
        as not adult.
        """
        try:
            details = await self.get_game_details(game.app_id, bypass_cache=bypass_cache)
        except SteamClientError as e:
            self._logger.warning(
                "Adult content check failed, assuming not adult",
                app_id=game.app_id,
                error=str(e),
            )
            return False
        return self._adult_content_detector.is_adult(details)

    def extract_screenshots(
        self,
        details: SteamGameDetails,
        limit: int = DEFAULT_SCREENSHOT_LIMIT,
    ) -> list[str]:
        """Extract up to ``limit`` full-size screenshot URLs."""
        return self._metadata_extractor.extract_screenshots(details, limit)

    def clear_cache(self) -> None:
        """Clear both caches and drop the search index."""
        self._app_list_cache.clear()
        self._details_cache.clear()
        self._matcher.invalidate_index()
        self._logger.info("Caches cleared")

    def get_cache_stats(self) -> CacheStats:
        """
        Get cache statistics.

        The combined hit rate weights each cache's hit rate by its current
        entry count. It is an approximation for diagnostics, not an exact
        hits / lookups ratio.
        """
        app_list = self._app_list_cache.stats()
        details = self._details_cache.stats()

        total_size = app_list.size + details.size
        weighted_hits = app_list.hit_rate * app_list.size + details.hit_rate * details.size
        hit_rate = weighted_hits / total_size if total_size > 0 else 0.0

        return CacheStats(
            app_list_size=app_list.size,
            details_cache_size=details.size,
            hit_rate=hit_rate,
        )
