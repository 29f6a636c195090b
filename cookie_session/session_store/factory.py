"""Factory for choosing the session cache backend at startup."""

from __future__ import annotations

import redis.asyncio as aioredis

from cookie_session import config
from cookie_session.session_store.base import SessionCache
from cookie_session.session_store.memory import InMemorySessionCache
from cookie_session.session_store.redis import RedisSessionCache
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="session_store/factory")


def build_session_cache(settings: config.SessionSettings | None = None) -> SessionCache:
    """Return a Redis cache when `redis_url` is set, otherwise an in-memory one."""
    settings = settings or config.settings
    if settings.redis_url:
        client = aioredis.Redis.from_url(settings.redis_url)
        logger.info("Using RedisSessionCache", extra={"redis_url": mask_url(settings.redis_url)})
        return RedisSessionCache(client)
    logger.info("Using InMemorySessionCache (no redis_url configured)")
    return InMemorySessionCache()
