"""Mutable per-request session container used by SessionMiddleware."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from cookie_session.session_id import generate_session_id
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session/session")


class Session:
    """
    Data bag plus lifecycle flags for a single request.

    A session built from a valid incoming cookie starts out begun. A fresh
    session only becomes persistent once handler code calls `begin()` (or
    `start()`, or regenerates its id); until then the middleware leaves the
    response untouched.

    Item access is a thin layer over `get`/`set`/`remove`:

        session["user_id"] = 42
        if "user_id" in session:
            del session["user_id"]
    """

    def __init__(self, session_id: Optional[str] = None, data: Optional[Mapping[str, Any]] = None) -> None:
        self._id = session_id or None
        self._data: dict[str, Any] = dict(data or {})
        self._begun = self._id is not None
        self._dirty = False
        self._destroyed = False
        self._regenerated = False
        self._old_id: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"Session(id={self._id!r}, begun={self._begun}, dirty={self._dirty}, "
            f"destroyed={self._destroyed}, regenerated={self._regenerated})"
        )

    # -- lifecycle ---------------------------------------------------------

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def old_id(self) -> Optional[str]:
        """Id held before the most recent regeneration, if any."""
        return self._old_id

    @property
    def is_begun(self) -> bool:
        return self._begun

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def is_regenerated(self) -> bool:
        return self._regenerated

    def begin(self) -> None:
        """Mark the session active so it gets an id, a cookie and storage."""
        self._begun = True

    def start(self) -> None:
        """Alias of begin()."""
        self.begin()

    def regenerate_id(self, new_id: str) -> None:
        """
        Switch to `new_id`, keeping the data.

        The previous id is remembered in `old_id` so its cache key can be
        dropped when the response is committed. Repeating the call with the
        current id does nothing. Calls after `destroy()` are ignored.
        """
        if self._destroyed:
            logger.debug("Ignoring regenerate_id() on a destroyed session")
            return
        if new_id == self._id:
            return
        if self._id is None:
            # nothing was ever stored under a previous id
            self.assign_id(new_id)
            self._dirty = True
            return
        self._old_id = self._id
        self._id = new_id
        self._regenerated = True
        self._dirty = True
        self._begun = True

    def regenerate(self) -> None:
        """Regenerate with a freshly generated id."""
        self.regenerate_id(generate_session_id())

    def assign_id(self, new_id: str) -> None:
        """Give an id-less session its first id (not a regeneration)."""
        self._id = new_id
        self._begun = True

    def destroy(self) -> None:
        """Clear all data; the middleware deletes the stored copy and expires the cookie."""
        self._data = {}
        self._destroyed = True
        self._dirty = True

    # -- data --------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if self._reject_if_destroyed("set"):
            return
        self._data[key] = value
        self._dirty = True

    def remove(self, key: str) -> None:
        """Drop `key`; missing keys are ignored and leave the session clean."""
        if self._reject_if_destroyed("remove"):
            return
        if key in self._data:
            del self._data[key]
            self._dirty = True

    def replace(self, data: Mapping[str, Any]) -> None:
        if self._reject_if_destroyed("replace"):
            return
        self._data = dict(data)
        self._dirty = True

    def all(self) -> dict[str, Any]:
        """Shallow copy of the session data."""
        return dict(self._data)

    def _reject_if_destroyed(self, operation: str) -> bool:
        if self._destroyed:
            logger.debug(f"Ignoring {operation}() on a destroyed session")
            return True
        return False

    # -- item access -------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return key in self._data
