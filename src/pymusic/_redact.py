"""Helpers for safe debug logging.

Requests carry user cookies both as a header and as a ``cookie`` query
parameter. This module masks those values before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "cookie",
        "token",
        "authorization",
        "access_token",
        "refresh_token",
        "musickey",
        "password",
    }
)

_MAX_DEPTH = 20


def _mask(value: Any) -> str:
    if isinstance(value, str):
        return f"<redacted:{len(value)}>"
    return "<redacted>"


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a copy of *value* with credentials masked and long strings cut."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"

    if isinstance(value, Mapping):
        return {
            str(key): (
                _mask(item)
                if str(key).lower() in _SENSITIVE_KEYS
                else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            )
            for key, item in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]

    return repr(value)
