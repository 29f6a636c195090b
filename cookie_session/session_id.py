"""Generation and validation of opaque session identifiers."""

import re
import secrets

SESSION_ID_BYTES = 32
MIN_SESSION_ID_LENGTH = 16
MAX_SESSION_ID_LENGTH = 128

_HEX_RE = re.compile(r"[A-Fa-f0-9]+")


def generate_session_id() -> str:
    """Return a new random session id (64 hex characters)."""
    return secrets.token_hex(SESSION_ID_BYTES)


def is_valid_session_id(candidate) -> bool:
    """Return True if `candidate` looks like a session id we could have issued.

    Anything else (missing cookie, wrong length, non-hex characters) is
    handled exactly like a request without a session cookie.
    """
    if not isinstance(candidate, str):
        return False
    if not MIN_SESSION_ID_LENGTH <= len(candidate) <= MAX_SESSION_ID_LENGTH:
        return False
    return _HEX_RE.fullmatch(candidate) is not None
