"""Cookie attribute policy: turn settings plus a session id into a Set-Cookie directive."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from starlette.responses import Response

from cookie_session.config import SessionSettings

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


@dataclass(frozen=True)
class CookieDirective:
    """A single Set-Cookie header to emit, either issuing or expiring the session cookie."""
    name: str
    value: str
    max_age: Optional[int]
    expires: Optional[datetime]
    path: str
    domain: str
    secure: bool
    http_only: bool
    same_site: str

    @property
    def is_expiry(self) -> bool:
        return self.max_age == 0 and self.value == ""

    def set_cookie_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for starlette's Response.set_cookie()."""
        return {
            "key": self.name,
            "value": self.value,
            "max_age": self.max_age,
            "expires": self.expires,
            "path": self.path,
            "domain": self.domain or None,
            "secure": self.secure,
            "httponly": self.http_only,
            "samesite": self.same_site or None,
        }

    def apply(self, response: Response) -> Response:
        response.set_cookie(**self.set_cookie_kwargs())
        return response


def issue_cookie(settings: SessionSettings, session_id: str, now: Optional[datetime] = None) -> CookieDirective:
    """
    Directive that hands `session_id` to the client.

    With a positive TTL the cookie carries Max-Age and Expires matching the
    cache TTL; with ttl == 0 it is a browser-session cookie.
    """
    if settings.ttl > 0:
        now = now or datetime.now(timezone.utc)
        max_age: Optional[int] = settings.ttl
        expires: Optional[datetime] = now.astimezone(timezone.utc) + timedelta(seconds=settings.ttl)
    else:
        max_age = None
        expires = None
    return CookieDirective(
        name=settings.cookie_name,
        value=session_id,
        max_age=max_age,
        expires=expires,
        path=settings.cookie_path,
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        http_only=settings.cookie_http_only,
        same_site=settings.cookie_same_site,
    )


def expire_cookie(settings: SessionSettings) -> CookieDirective:
    """Directive that removes the session cookie from the client."""
    return CookieDirective(
        name=settings.cookie_name,
        value="",
        max_age=0,
        expires=EPOCH,
        path=settings.cookie_path,
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        http_only=settings.cookie_http_only,
        same_site=settings.cookie_same_site,
    )
