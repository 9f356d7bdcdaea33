"""Simple cache abstractions."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int | None = None) -> None:
        """Store a value, optionally expiring after ``ttl_seconds``."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime | None


class InMemoryCache(Cache):
    """Process-local cache. Entries without a TTL live until evicted."""

    def __init__(self, max_entries: int = 256) -> None:
        self._entries: dict[str, _CacheEntry] = {}
        self.max_entries = max_entries

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int | None = None) -> None:
        expires_at = (
            datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
            if ttl_seconds is not None
            else None
        )
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            self._entries.pop(oldest)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)
