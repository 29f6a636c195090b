"""Session cache backends."""

from .base import CachedValue, SessionCache
from .factory import build_session_cache
from .memory import InMemorySessionCache
from .redis import RedisSessionCache

__all__ = [
    "CachedValue",
    "SessionCache",
    "InMemorySessionCache",
    "RedisSessionCache",
    "build_session_cache",
]
