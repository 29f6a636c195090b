"""In-memory session cache with per-key TTL, intended for development and tests."""

import asyncio
import time
from typing import Callable, Optional

from cookie_session.session_store.base import CachedValue, SessionCache
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_store/in_memory_session_cache")


class InMemorySessionCache(SessionCache):
    """Single-process, TTL-aware cache guarded by an asyncio.Lock (dev/test)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """`clock` is injectable so tests can move time without sleeping."""
        logger.debug("Initializing InMemorySessionCache")
        self._clock = clock
        self._entries: dict[str, tuple[CachedValue, Optional[float]]] = {}
        self._lock = asyncio.Lock()

    def _expired(self, expires_at: Optional[float]) -> bool:
        return expires_at is not None and expires_at <= self._clock()

    async def get(self, key: str) -> Optional[CachedValue]:
        """Return the value, evicting it first if its TTL has run out."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._expired(expires_at):
                self._entries.pop(key, None)
                return None
            return value

    async def set(self, key: str, value: CachedValue, ttl_seconds: int) -> None:
        async with self._lock:
            expires_at = self._clock() + ttl_seconds if ttl_seconds > 0 else None
            self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def ttl(self, key: str) -> Optional[float]:
        """Seconds left for `key`; None if missing or stored without expiry."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry[1] is None:
                return None
            return max(0.0, entry[1] - self._clock())

    async def clear(self) -> None:
        """Drop every entry."""
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return sum(1 for _value, expires_at in self._entries.values() if not self._expired(expires_at))
