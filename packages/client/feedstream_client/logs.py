from __future__ import annotations

import sys

import orjson

from feedstream_client.canonical import json_bytes
from feedstream_client.core.config import Settings


def log_json(payload: dict[str, object], *, settings: Settings) -> None:
    if not settings.log_json:
        return
    try:
        sys.stdout.write(json_bytes(payload).decode("utf-8") + "\n")
    except (TypeError, orjson.JSONEncodeError, OSError):
        pass
