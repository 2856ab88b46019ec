"""Structured JSON logging for the broadcast relay.

Every event is one JSON object per line tagged with ``service``. Channel
credentials are replaced with ``[MASKED]`` whether they arrive under a
credential field name or embedded in any other string value.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from shared.config import settings


SERVICE_NAME = "broadcaster"
MASK = "[MASKED]"

_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", settings.LOG_LEVEL).upper(), logging.INFO)
logging.basicConfig(level=_LEVEL, format="%(message)s")

# Settings fields holding credentials; also masked when used as log field names.
_CREDENTIAL_FIELDS = ("YOUTUBE_CLIENT_SECRET", "YOUTUBE_REFRESH_TOKEN", "BROADCAST_SECRET")
_MASKED_KEYS = {*_CREDENTIAL_FIELDS, "refresh_token", "access_token"}


def _mask(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    for name in _CREDENTIAL_FIELDS:
        secret = getattr(settings, name)
        if secret and secret in value:
            value = value.replace(secret, MASK)
    return value


def _log(level: int, event: str, **fields: object) -> None:
    record: dict[str, Any] = {"service": SERVICE_NAME, "event": event}
    record.update(
        {key: MASK if key in _MASKED_KEYS else _mask(value) for key, value in fields.items()}
    )
    logging.log(level, json.dumps(record))


def log_info(event: str, **fields: object) -> None:
    _log(logging.INFO, event, **fields)


def log_error(event: str, **fields: object) -> None:
    _log(logging.ERROR, event, **fields)


def log_debug(event: str, **fields: object) -> None:
    _log(logging.DEBUG, event, **fields)


__all__ = ["log_info", "log_error", "log_debug", "SERVICE_NAME", "MASK"]
