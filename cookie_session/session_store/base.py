"""Shared protocol for the key-value caches that back session data."""

from typing import Optional, Protocol, Union

CachedValue = Union[str, bytes]


class SessionCache(Protocol):
    """Async get/set/delete with per-key TTL, keyed by full cache key."""

    async def get(self, key: str) -> Optional[CachedValue]:
        """Return the stored value, or None if missing or expired."""

    async def set(self, key: str, value: CachedValue, ttl_seconds: int) -> None:
        """Store `value` under `key`, (re)starting its TTL. ttl_seconds <= 0 means no expiry."""

    async def delete(self, key: str) -> None:
        """Delete `key`; absent keys are not an error."""
