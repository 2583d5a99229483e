"""
Adult content detection from Steam store details.
"""

from steam_client.contracts import Category, SteamGameDetails

# Content descriptor 3 = Adult Only Sexual Content
ADULT_DESCRIPTOR_ID = 3
ADULT_AGE_THRESHOLD = 18
ADULT_CATEGORY_MARKER = "adult only"


class AdultContentDetector:
    """
    Detects adult content using multiple signals from Steam data.

    A game is adult if any of these hold:
    1. Required age >= 18
    2. Content descriptor ID 3 (Adult Only Sexual Content)
    3. A category description containing "Adult Only"
    """

    def is_adult(self, details: SteamGameDetails) -> bool:
        """Check if a game contains adult content."""
        return (
            self.has_age_restriction(details.required_age)
            or self.has_adult_descriptor(details.content_descriptors.ids)
            or self.has_adult_category(details.categories)
        )

    def has_age_restriction(self, required_age: int) -> bool:
        """Check if the required age is 18 or above."""
        return required_age >= ADULT_AGE_THRESHOLD

    def has_adult_descriptor(self, descriptor_ids: list[int]) -> bool:
        """Check if content descriptors include the adult-only id."""
        return ADULT_DESCRIPTOR_ID in (descriptor_ids or [])

    def has_adult_category(self, categories: list[Category]) -> bool:
        """Case-insensitive search for "adult only" in category descriptions."""
        return any(
            ADULT_CATEGORY_MARKER in category.description.lower()
            for category in categories or []
        )
