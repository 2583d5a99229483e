"""
Token bucket rate limiter for API requests.

Keeps the client within Steam's quota (~200 requests per 5 minutes).
The bucket never blocks: callers ask for a token and, when none is
available, ask when the next one will be.
"""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from steam_client.logger import get_logger

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000


@dataclass
class RateLimiterConfig:
    """Configuration for the token bucket."""

    capacity: int = 200
    refill_window_ms: int = 300_000


@dataclass
class TokenBucket:
    """
    Token bucket rate limiter.

    The bucket starts full and refills continuously, going from zero to
    ``capacity`` tokens over ``refill_window_ms``. The token count is kept
    as a float so fractional accrual is never lost between calls.

    Example:
        >>> bucket = TokenBucket(RateLimiterConfig(capacity=200, refill_window_ms=300_000))
        >>> if not bucket.try_consume():
        ...     wait_until = bucket.retry_after()
    """

    config: RateLimiterConfig
    clock: Clock = wall_clock_ms
    _tokens: float = field(init=False)
    _last_refill: float = field(init=False)
    _logger: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize bucket state."""
        if self.config.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {self.config.capacity}")
        if self.config.refill_window_ms <= 0:
            raise ValueError(
                f"refill_window_ms must be > 0, got {self.config.refill_window_ms}"
            )
        self._tokens = float(self.config.capacity)
        self._last_refill = self.clock()
        self._logger = get_logger(__name__, component="rate_limiter")

    def _refill(self) -> float:
        """Refill tokens based on elapsed time and return the current time."""
        now = self.clock()
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(
                float(self.config.capacity),
                self._tokens
                + elapsed * self.config.capacity / self.config.refill_window_ms,
            )
            # Never moves backwards
            self._last_refill = now
        return now

    def try_consume(self) -> bool:
        """
        Take one token if available.

        Returns:
            bool: True if the request may proceed, False if the bucket is empty
        """
        self._refill()

        if self._tokens >= 1:
            self._tokens -= 1
            return True

        self._logger.debug(
            "Rate limit reached",
            tokens_available=round(self._tokens, 3),
        )
        return False

    def retry_after(self) -> int:
        """
        Get the timestamp when the next token will be available.

        Returns:
            int: Epoch milliseconds; the current time if a token is available now
        """
        now = self._refill()

        if self._tokens >= 1:
            return math.floor(now)

        wait_ms = math.ceil(
            (1 - self._tokens) * self.config.refill_window_ms / self.config.capacity
        )
        return math.floor(now) + wait_ms

    def available_tokens(self) -> int:
        """Get whole tokens currently available (for monitoring)."""
        self._refill()
        return math.floor(self._tokens)
