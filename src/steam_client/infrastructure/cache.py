"""
In-memory LRU cache with per-entry TTL and hit/miss statistics.

Entries expire a fixed time after they were written; reading an entry
refreshes its recency but never its expiry. Expired entries are treated
as absent and are dropped lazily when encountered or when room is needed.
"""

from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

from steam_client.infrastructure.token_bucket import Clock, wall_clock_ms

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_TTL_MS = 3_600_000


@dataclass(frozen=True)
class CacheStatistics:
    """Snapshot of cache size and hit rate."""

    size: int
    hit_rate: float


@dataclass
class _CacheEntry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[K, V]):
    """
    LRU cache with TTL support and statistics tracking.

    Example:
        >>> cache: TTLCache[str, SteamGameDetails] = TTLCache(1000, ttl_ms=3_600_000)
        >>> cache.set("1091500", details)
        >>> cache.get("1091500")
    """

    def __init__(
        self,
        max_size: int,
        ttl_ms: int = DEFAULT_TTL_MS,
        *,
        clock: Clock = wall_clock_ms,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        if ttl_ms <= 0:
            raise ValueError(f"ttl_ms must be > 0, got {ttl_ms}")
        self.max_size = max_size
        self.ttl_ms = ttl_ms
        self._clock = clock
        # Ordered least to most recently used
        self._entries: OrderedDict[K, _CacheEntry[V]] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def _live_entry(self, key: K, now: float) -> _CacheEntry[V] | None:
        """Return the entry for key if present and unexpired, dropping it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if now >= entry.expires_at:
            del self._entries[key]
            return None
        return entry

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]

    def get(self, key: K) -> V | None:
        """
        Get value from cache.

        Counts as a hit or miss for statistics. A hit marks the key as most
        recently used without extending its TTL.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if missing or expired
        """
        entry = self._live_entry(key, self._clock())
        if entry is None:
            self._misses += 1
            return None

        self._hits += 1
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: K, value: V, ttl_ms: int | None = None) -> None:
        """
        Insert or replace a value.

        Args:
            key: Cache key
            value: Value to cache
            ttl_ms: Custom TTL in milliseconds (overrides the cache default)
        """
        now = self._clock()
        ttl = self.ttl_ms if ttl_ms is None else ttl_ms

        self._entries[key] = _CacheEntry(value=value, expires_at=now + ttl)
        self._entries.move_to_end(key)

        if len(self._entries) > self.max_size:
            self._purge_expired(now)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def has(self, key: K) -> bool:
        """Check if key exists and is not expired (does not affect statistics)."""
        entry = self._entries.get(key)
        return entry is not None and self._clock() < entry.expires_at

    def clear(self) -> None:
        """Remove all entries and reset statistics."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStatistics:
        """
        Get cache statistics.

        Returns:
            CacheStatistics: Number of live entries and hits / (hits + misses)
        """
        self._purge_expired(self._clock())
        lookups = self._hits + self._misses
        hit_rate = self._hits / lookups if lookups > 0 else 0.0
        return CacheStatistics(size=len(self._entries), hit_rate=hit_rate)

    def __len__(self) -> int:
        return self.stats().size

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]
