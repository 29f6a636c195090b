"""
ASGI middleware that gives every request a cookie-backed, cache-persisted Session.

    app = FastAPI()
    app.add_middleware(
        SessionMiddleware,
        cache=RedisSessionCache(redis.asyncio.Redis.from_url("redis://localhost:6379")),
        settings=SessionSettings(ttl=1800, cookie_same_site="strict"),
    )

    @app.get("/")
    async def index(session: Session = Depends(get_session)):
        session.begin()
        session["visits"] = session.get("visits", 0) + 1
        return {"visits": session["visits"]}

Request phase: a valid session cookie is loaded from the cache and the
session counts as begun; anything else yields an empty, not-yet-begun
session and no cache read.

Response phase (only when the handler returned a response):

- not begun and no id: response passes through untouched
- destroyed: stored copy deleted, cookie expired
- otherwise: id assigned if still missing, old key deleted after a
  regeneration, data written with a fresh TTL, cookie (re)issued

A handler exception propagates before any of this runs, so nothing is
persisted for failed requests. Cache errors in either phase propagate too.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cookie_session import config
from cookie_session.cookies import CookieDirective, expire_cookie, issue_cookie
from cookie_session.payload import dump_session_data, load_session_data
from cookie_session.session import Session
from cookie_session.session_id import generate_session_id, is_valid_session_id
from cookie_session.session_store.base import SessionCache
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session/middleware")

SESSION_STATE_ATTR = "session"


class SessionMiddleware(BaseHTTPMiddleware):
    """Load, expose and reconcile a Session around each request."""

    def __init__(
        self,
        app: ASGIApp,
        cache: SessionCache,
        settings: Optional[config.SessionSettings] = None,
    ) -> None:
        super().__init__(app)
        self.cache = cache
        self.settings = settings or config.settings

    def _key(self, session_id: str) -> str:
        return f"{self.settings.key_prefix}{session_id}"

    async def load_session(self, incoming: Optional[str]) -> Session:
        """Build the request's Session from the incoming cookie value."""
        if not is_valid_session_id(incoming):
            if incoming:
                logger.debug("Ignoring malformed session cookie")
            return Session(None, {})
        raw = await self.cache.get(self._key(incoming))
        return Session(incoming, load_session_data(raw))

    async def commit_session(self, session: Session, incoming_id: Optional[str]) -> Optional[CookieDirective]:
        """
        Persist `session` and return the cookie to emit, or None to leave the response alone.

        `incoming_id` is the validated id the request arrived with (None if
        there was none). All cache operations have finished when this returns.
        """
        if not session.is_begun and session.id is None:
            return None

        if session.is_destroyed:
            doomed = incoming_id or session.id
            if doomed is not None:
                logger.debug("Deleting destroyed session")
                await self.cache.delete(self._key(doomed))
            return expire_cookie(self.settings)

        if session.id is None:
            session.assign_id(generate_session_id())
            logger.debug("Assigned id to newly begun session")

        pending = [self.cache.set(self._key(session.id), dump_session_data(session.all()), self.settings.ttl)]
        stale_id = self._stale_id(session, incoming_id)
        if stale_id is not None:
            logger.debug("Session id regenerated; dropping previous key")
            pending.append(self.cache.delete(self._key(stale_id)))
        # wait for every operation, then surface the first failure
        results = await asyncio.gather(*pending, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result

        return issue_cookie(self.settings, session.id)

    @staticmethod
    def _stale_id(session: Session, incoming_id: Optional[str]) -> Optional[str]:
        """Id whose key must go after a regeneration: the stored one, else the last previous id."""
        if not session.is_regenerated:
            return None
        if incoming_id is not None and incoming_id != session.id:
            return incoming_id
        if session.old_id is not None and session.old_id != session.id:
            return session.old_id
        return None

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        incoming = request.cookies.get(self.settings.cookie_name)
        session = await self.load_session(incoming)
        incoming_id = session.id
        setattr(request.state, SESSION_STATE_ATTR, session)

        response = await call_next(request)

        directive = await self.commit_session(session, incoming_id)
        if directive is not None:
            directive.apply(response)
        return response


def get_session(request: Request) -> Session:
    """FastAPI dependency returning the current request's Session."""
    session = getattr(request.state, SESSION_STATE_ATTR, None)
    if session is None:
        raise RuntimeError("SessionMiddleware is not installed")
    return session
