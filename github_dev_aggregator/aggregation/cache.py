"""In-memory time-to-live cache for aggregated results."""

import time
from dataclasses import dataclass
from typing import Any, Callable

import structlog

from github_dev_aggregator.utils.constants import ACCOUNT_CACHE_KEY_PREFIX, DEVELOPERS_CACHE_KEY

logger = structlog.get_logger(__name__)

Clock = Callable[[], float]

DEFAULT_TTL_SECONDS = 3600.0


def developers_key() -> str:
    """Cache key of the bulk developer listing."""
    return DEVELOPERS_CACHE_KEY


def account_key(username: str) -> str:
    """Cache key of one developer's detail; GitHub logins are case-insensitive."""
    return f"{ACCOUNT_CACHE_KEY_PREFIX}{username.lower()}"


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the clock reading it was stored at."""

    value: Any
    created_at: float

    def is_expired(self, now: float, ttl_seconds: float) -> bool:
        """Whether the entry is past its time-to-live."""
        return now >= self.created_at + ttl_seconds


class ResultCache:
    """Key/value cache with one uniform TTL, expired lazily on read.

    Values are stored as whole replacements and must not be mutated after
    ``set``. An expired entry is never served: ``get`` drops it and reports a
    miss.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Clock = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Seconds an entry stays visible after it was set
            clock: Monotonic clock returning seconds (default: time.monotonic)
        """
        if ttl_seconds <= 0:
            raise ValueError(f"Cache TTL must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return the live value stored under ``key``, or None on a miss."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock(), self.ttl_seconds):
            del self._entries[key]
            logger.debug("Cache entry expired", key=key)
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        self._entries[key] = CacheEntry(value=value, created_at=self._clock())

    def invalidate(self, key: str) -> None:
        """Drop the entry stored under ``key``, if any."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
