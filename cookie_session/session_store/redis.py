"""Redis-backed session cache with TTL."""

from typing import Optional

from cookie_session.session_store.base import CachedValue, SessionCache
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_store/redis_session_cache")


class RedisSessionCache(SessionCache):
    """Session cache on top of a `redis.asyncio.Redis` client.

    Failures are logged and re-raised: the middleware must not hand out a
    cookie for data that never reached Redis.
    """

    def __init__(self, client) -> None:
        """Wrap an async Redis client (anything exposing get/set/setex/delete coroutines)."""
        logger.debug("Initializing RedisSessionCache")
        self.client = client

    async def get(self, key: str) -> Optional[CachedValue]:
        try:
            return await self.client.get(key)
        except Exception as exc:
            logger.error("Failed to read session from Redis: %s", exc)
            raise

    async def set(self, key: str, value: CachedValue, ttl_seconds: int) -> None:
        """SETEX with a positive TTL, plain SET otherwise."""
        try:
            if ttl_seconds > 0:
                await self.client.setex(key, ttl_seconds, value)
            else:
                await self.client.set(key, value)
        except Exception as exc:
            logger.error("Failed to write session to Redis: %s", exc)
            raise

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except Exception as exc:
            logger.error("Failed to delete session from Redis: %s", exc)
            raise

    async def close(self) -> None:
        """Release the underlying connection pool."""
        await self.client.aclose()
