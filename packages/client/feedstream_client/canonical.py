from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import orjson

STREAM_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


def stream_time(dt: datetime) -> str:
    """Service timestamp: UTC, microsecond precision, no offset."""
    if getattr(dt, "tzinfo", None) is not None:
        dt = dt.astimezone(UTC).replace(tzinfo=None)
    return dt.strftime(STREAM_TIME_FORMAT)


def _default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return stream_time(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def json_bytes(obj: Any) -> bytes:
    return orjson.dumps(obj, default=_default, option=orjson.OPT_PASSTHROUGH_DATETIME)
