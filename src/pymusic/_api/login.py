"""QR-code login endpoints.

Storing the resulting credentials is up to the caller; pass them back
through :meth:`pymusic.MusicClient.set_auth`.

Endpoints:
  - /api/qrcode/start
  - /api/qrcode/subscribe (server-sent events)
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

from pymusic._api._common import get_json
from pymusic._constants import QRCODE_START_ENDPOINT, QRCODE_SUBSCRIBE_ENDPOINT
from pymusic._transport import HttpTransport, Transport
from pymusic.cancel import CancelToken

_logger = logging.getLogger(__name__)


async def start_qrcode_login(
    transport: Transport,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    """Ask the server to issue a login QR code."""
    return await get_json(transport, QRCODE_START_ENDPOINT, cancel_token=cancel_token)


async def subscribe_qrcode(transport: HttpTransport) -> AsyncIterator[Any]:
    """Yield QR login status events until the server closes the stream.

    ``data:`` payloads are JSON-decoded when possible and yielded as the
    raw string otherwise.
    """
    async for payload in transport.stream_events(QRCODE_SUBSCRIBE_ENDPOINT):
        if not payload:
            continue
        try:
            event: Any = json.loads(payload)
        except json.JSONDecodeError:
            event = payload
        _logger.debug("QR login event: %s", type(event).__name__)
        yield event
