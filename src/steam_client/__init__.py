"""
Steam Client.

Async client for the Steam Web API with fuzzy game search,
metadata enrichment and adult content detection.
"""

__version__ = "0.1.0"

from steam_client.client import SteamClient  # noqa: E402
from steam_client.config import SteamClientConfig, get_settings  # noqa: E402
from steam_client.contracts import (  # noqa: E402
    CacheStats,
    CatalogEntry,
    EnrichedGameData,
    PartialGameData,
    SearchOptions,
    SteamGameDetails,
)
from steam_client.errors import (  # noqa: E402
    GameNotFoundError,
    InvalidApiKeyError,
    RateLimitError,
    SteamApiError,
    SteamClientError,
)
from steam_client.logger import get_logger, setup_logging  # noqa: E402

__all__ = [
    "CacheStats",
    "CatalogEntry",
    "EnrichedGameData",
    "GameNotFoundError",
    "InvalidApiKeyError",
    "PartialGameData",
    "RateLimitError",
    "SearchOptions",
    "SteamApiError",
    "SteamClient",
    "SteamClientConfig",
    "SteamClientError",
    "SteamGameDetails",
    "get_logger",
    "get_settings",
    "setup_logging",
    "__version__",
]
