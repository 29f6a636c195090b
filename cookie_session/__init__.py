"""Cookie-identified, cache-backed sessions for Starlette and FastAPI."""

from .config import SessionSettings
from .cookies import CookieDirective, expire_cookie, issue_cookie
from .middleware import SessionMiddleware, get_session
from .session import Session
from .session_id import generate_session_id, is_valid_session_id
from .session_store import InMemorySessionCache, RedisSessionCache, SessionCache, build_session_cache

__all__ = [
    "SessionSettings",
    "CookieDirective",
    "issue_cookie",
    "expire_cookie",
    "SessionMiddleware",
    "get_session",
    "Session",
    "generate_session_id",
    "is_valid_session_id",
    "SessionCache",
    "InMemorySessionCache",
    "RedisSessionCache",
    "build_session_cache",
]
