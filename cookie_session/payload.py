"""JSON encoding of session data for the cache."""

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any, Mapping

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session/payload")


def _json_default(obj):
    """Serialize datetimes, dataclasses and pydantic models; reject anything else."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    raise TypeError(f"Session value of type {type(obj).__name__} is not JSON serializable")


def dump_session_data(data: Mapping[str, Any]) -> str:
    """Encode session data as compact JSON text."""
    return json.dumps(dict(data), default=_json_default, separators=(",", ":"))


def load_session_data(raw: Any) -> dict[str, Any]:
    """
    Decode a cached payload back into a dict.

    Missing values, undecodable text and JSON that is not an object all come
    back as an empty dict; a broken cache entry never fails the request.
    """
    if raw is None or raw == "" or raw == b"":
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Discarding session payload that is not UTF-8")
            return {}
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("Discarding undecodable session payload: %s", exc)
        return {}
    if not isinstance(decoded, dict):
        logger.warning("Discarding session payload of type %s", type(decoded).__name__)
        return {}
    return decoded
