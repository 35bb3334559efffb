"""MV (music video) endpoints.

Both endpoints answer a :class:`~pymusic.models.KeyedResponse` whose
``data`` is keyed by the requested ``vids`` value rather than a fixed
field name.

Endpoints:
  - /mv/getDetail
  - /mv/getMvUrls
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pymusic._api._common import get_json
from pymusic._constants import MV_DETAIL_ENDPOINT, MV_URLS_ENDPOINT
from pymusic._transport import Transport
from pymusic.cancel import CancelToken
from pymusic.exceptions import MusicTransportError
from pymusic.keyed import KeyedResolution, resolve_keyed
from pymusic.models._base import KeyedResponse
from pymusic.models.mv import MvDetail, MvUrls
from pymusic.models.requests import MvParams

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _parse_keyed(endpoint: str, body: Any, model: type[M]) -> KeyedResponse[M]:
    """Validate the envelope, then each entry on its own.

    A malformed entry is dropped so it cannot hide its valid siblings. A
    malformed envelope (``data`` not a mapping, bad ``code``) still raises.
    """
    try:
        envelope = KeyedResponse[Any].model_validate(body if body is not None else {})
    except ValidationError as exc:
        raise MusicTransportError(f"Unexpected payload from {endpoint}: {exc}", url=endpoint) from exc

    entries: dict[str, M | None] = {}
    for key, value in envelope.data.items():
        if value is None:
            entries[key] = None
            continue
        try:
            entries[key] = model.model_validate(value)
        except ValidationError:
            _logger.debug("%s: dropping malformed entry %r", endpoint, key, exc_info=True)

    return KeyedResponse[model](  # type: ignore[valid-type]
        code=envelope.code,
        message=envelope.message,
        data=entries,
        timestamp=envelope.timestamp,
    )


async def fetch_mv_detail(
    transport: Transport,
    params: MvParams,
    *,
    cancel_token: CancelToken | None = None,
) -> KeyedResponse[MvDetail]:
    body = await get_json(transport, MV_DETAIL_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)
    response = _parse_keyed(MV_DETAIL_ENDPOINT, body, MvDetail)
    _logger.debug("MV detail vids=%s keys=%s", params.vids, list(response.data))
    return response


async def fetch_mv_urls(
    transport: Transport,
    params: MvParams,
    *,
    cancel_token: CancelToken | None = None,
) -> KeyedResponse[MvUrls]:
    body = await get_json(transport, MV_URLS_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)
    response = _parse_keyed(MV_URLS_ENDPOINT, body, MvUrls)
    _logger.debug("MV urls vids=%s keys=%s", params.vids, list(response.data))
    return response


async def resolve_mv_detail(
    transport: Transport,
    params: MvParams,
    *,
    cancel_token: CancelToken | None = None,
) -> KeyedResolution[MvDetail] | None:
    """Fetch the detail of ``params.vids``, falling back to the first entry."""
    response = await fetch_mv_detail(transport, params, cancel_token=cancel_token)
    return resolve_keyed(response, params.vids, label="MV detail")


async def resolve_mv_urls(
    transport: Transport,
    params: MvParams,
    *,
    cancel_token: CancelToken | None = None,
) -> KeyedResolution[MvUrls] | None:
    """Fetch the URL matrix of ``params.vids``, falling back to the first entry."""
    response = await fetch_mv_urls(transport, params, cancel_token=cancel_token)
    return resolve_keyed(response, params.vids, label="MV urls")
