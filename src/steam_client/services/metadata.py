"""
Metadata extraction: Steam store details to enriched records.
"""

from steam_client.contracts import (
    EnrichedGameData,
    PriceOverview,
    Rating,
    Recommendations,
    ReviewStats,
    SteamGameDetails,
    SteamRating,
)
from steam_client.utils.price import format_free, format_price

DEFAULT_SCREENSHOT_LIMIT = 3


class MetadataExtractor:
    """
    Transforms Steam game details into simplified enriched data.

    Example:
        >>> extractor = MetadataExtractor()
        >>> enriched = extractor.extract_metadata(details, review_stats)
        >>> enriched.price
        '$59.99'
    """

    def extract_metadata(
        self,
        details: SteamGameDetails,
        review_stats: ReviewStats | None = None,
    ) -> EnrichedGameData:
        """
        Extract enriched metadata from game details.

        Args:
            details: Full Steam game details
            review_stats: Optional review summary for the Steam rating

        Returns:
            EnrichedGameData: New record; ``is_adult`` is left for the caller
        """
        return EnrichedGameData(
            steam_id=details.app_id,
            steam_url=details.store_url,
            cover_url=details.header_image or None,
            price=self.format_price(details.price_overview, details.is_free),
            release_date=details.release_date.date or None,
            categories=self.extract_categories(details),
            rating=self.extract_rating(details, review_stats),
            screenshots=self.extract_screenshots(details),
        )

    def format_price(
        self,
        price_overview: PriceOverview | None,
        is_free: bool = False,
    ) -> str | None:
        """Format price as e.g. "$59.99" or "Free to Play" (None when unknown)."""
        if is_free:
            return format_free()
        if price_overview is not None:
            return format_price(price_overview)
        return None

    def extract_screenshots(
        self,
        details: SteamGameDetails,
        limit: int = DEFAULT_SCREENSHOT_LIMIT,
    ) -> list[str]:
        """Extract up to ``limit`` full-size screenshot URLs."""
        return [screenshot.path_full for screenshot in details.screenshots[: max(limit, 0)]]

    def extract_categories(self, details: SteamGameDetails) -> list[str]:
        """Combine genre names and category names, genres first."""
        return [*details.genre_names, *details.category_names]

    def extract_rating(
        self,
        details: SteamGameDetails,
        review_stats: ReviewStats | None = None,
    ) -> Rating | None:
        """Combine Metacritic and Steam ratings (None if neither is available)."""
        metacritic = details.metacritic.score if details.metacritic else None
        steam = self.calculate_steam_rating(details.recommendations, review_stats)

        if not metacritic and steam is None:
            return None

        return Rating(metacritic=metacritic, steam=steam)

    def calculate_steam_rating(
        self,
        recommendations: Recommendations | None = None,
        review_stats: ReviewStats | None = None,
    ) -> SteamRating | None:
        """
        Calculate Steam rating from review statistics.

        Falls back to the recommendation count, with no percentage,
        when review statistics are unavailable.
        """
        if review_stats is not None and review_stats.total_reviews > 0:
            percent = round(review_stats.total_positive / review_stats.total_reviews * 100)
            return SteamRating(percent=percent, total=review_stats.total_reviews)

        if recommendations is not None and recommendations.total > 0:
            return SteamRating(percent=0, total=recommendations.total)

        return None
