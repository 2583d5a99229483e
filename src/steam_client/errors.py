"""
Exception hierarchy for the Steam client.

Every error raised by the client derives from SteamClientError so
callers can catch the whole family at once, while still being able
to tell rate limiting, missing games, bad credentials and generic
upstream failures apart.
"""

import time
from datetime import datetime, timezone
from typing import Any


class SteamClientError(Exception):
    """Base exception for all Steam client errors."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class SteamApiError(SteamClientError):
    """Raised when a Steam API request fails."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_data: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, status_code=status_code, **kwargs)
        self.response_data = response_data


class GameNotFoundError(SteamClientError):
    """Raised when no game matches a title or an app id does not exist."""

    def __init__(self, title: str, **kwargs: Any) -> None:
        super().__init__(f"Game not found: {title}", **kwargs)
        self.title = title


class RateLimitError(SteamClientError):
    """
    Raised when the rate limit is exceeded.

    Carries the epoch millisecond timestamp at which the next request
    will be allowed. The client never retries on its own.
    """

    def __init__(self, retry_after: int, **kwargs: Any) -> None:
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded. Retry after {self.retry_after_datetime.isoformat()}",
            **kwargs,
        )

    @property
    def retry_after_datetime(self) -> datetime:
        """Retry-after timestamp as an aware UTC datetime."""
        return datetime.fromtimestamp(self.retry_after / 1000, tz=timezone.utc)

    def retry_after_seconds(self, now_ms: float | None = None) -> float:
        """Seconds left until the retry-after timestamp (never negative)."""
        if now_ms is None:
            now_ms = time.time() * 1000
        return max(0.0, (self.retry_after - now_ms) / 1000)


class InvalidApiKeyError(SteamClientError):
    """Raised when the Steam API key is invalid or missing."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(
            "Invalid or missing Steam API key. Get one at https://steamcommunity.com/dev/apikey",
            **kwargs,
        )
