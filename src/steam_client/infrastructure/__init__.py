"""
Infrastructure for talking to Steam.

Rate limiting, in-memory caching and the HTTP client.
"""

from steam_client.infrastructure.api_client import ApiClient
from steam_client.infrastructure.cache import CacheStatistics, TTLCache
from steam_client.infrastructure.token_bucket import RateLimiterConfig, TokenBucket

__all__ = [
    "ApiClient",
    "CacheStatistics",
    "RateLimiterConfig",
    "TTLCache",
    "TokenBucket",
]
