"""Shared test fixtures."""

from typing import Any

import pytest
from steam_client.config import SteamClientConfig

START_MS = 1_700_000_000_000.0


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: float = START_MS) -> None:
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at a fixed timestamp."""
    return FakeClock()


@pytest.fixture
def config() -> SteamClientConfig:
    """Client configuration with a test API key."""
    return SteamClientConfig(api_key="test_api_key_123")


def make_store_payload(app_id: str, **overrides: Any) -> dict[str, Any]:
    """Build an /appdetails response for a single app."""
    data: dict[str, Any] = {
        "type": "game",
        "name": "Cyberpunk 2077",
        "steam_appid": int(app_id),
        "required_age": 0,
        "is_free": False,
        "detailed_description": "<p>Cyberpunk 2077 is an open-world action RPG.</p>",
        "short_description": "An open-world action RPG.",
        "header_image": f"https://cdn.akamai.steamstatic.com/steam/apps/{app_id}/header.jpg",
        "developers": ["CD PROJEKT RED"],
        "publishers": ["CD PROJEKT RED"],
        "price_overview": {
            "currency": "USD",
            "initial": 5999,
            "final": 2999,
            "discount_percent": 50,
            "initial_formatted": "$59.99",
            "final_formatted": "$29.99",
        },
        "categories": [
            {"id": 2, "description": "Single-player"},
            {"id": 22, "description": "Steam Achievements"},
        ],
        "genres": [
            {"id": "1", "description": "Action"},
            {"id": "3", "description": "RPG"},
        ],
        "screenshots": [
            {
                "id": i,
                "path_thumbnail": f"https://cdn.example/{app_id}/ss_{i}.600x338.jpg",
                "path_full": f"https://cdn.example/{app_id}/ss_{i}.1920x1080.jpg",
            }
            for i in range(5)
        ],
        "metacritic": {"score": 86, "url": "https://www.metacritic.com/game/cyberpunk-2077"},
        "recommendations": {"total": 700000},
        "release_date": {"coming_soon": False, "date": "Dec 9, 2020"},
        "content_descriptors": {"ids": [1, 5], "notes": "Violence and nudity."},
    }
    data.update(overrides)
    return {app_id: {"success": True, "data": data}}


@pytest.fixture
def store_payload() -> Any:
    """Factory for /appdetails responses."""
    return make_store_payload
