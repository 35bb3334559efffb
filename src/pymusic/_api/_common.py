"""Shared helpers for music API endpoint modules.

It is internal to pymusic and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pymusic._constants import SUCCESS_CODES
from pymusic._transport import Transport
from pymusic.cancel import CancelToken
from pymusic.exceptions import MusicApiError


def check_envelope(endpoint: str, body: Any) -> Any:
    """Raise :class:`MusicApiError` for a non-success envelope ``code``.

    Bodies without an integer-like ``code`` pass through unchanged.
    """
    if not isinstance(body, Mapping) or "code" not in body:
        return body
    try:
        code = int(body["code"])
    except (TypeError, ValueError):
        return body
    if code not in SUCCESS_CODES:
        message = str(body.get("message") or body.get("msg") or "")
        raise MusicApiError(
            f"{endpoint} failed: code={code} message={message}",
            code=code,
            endpoint=endpoint,
        )
    return body


async def get_json(
    transport: Transport,
    endpoint: str,
    *,
    params: Mapping[str, Any] | None = None,
    cancel_token: CancelToken | None = None,
) -> Any:
    """GET *endpoint* and return the checked JSON body.

    This is a thin helper for endpoint modules; it returns `Any` since
    list/detail endpoints answer objects with server-defined shapes.
    """
    body = await transport.request("GET", endpoint, params=params, cancel_token=cancel_token)
    return check_envelope(endpoint, body)
