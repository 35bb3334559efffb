"""Search endpoints.

Endpoints:
  - /search/complete (suggestions)
  - /search/searchByType
"""

from __future__ import annotations

from typing import Any

from pymusic._api._common import get_json
from pymusic._constants import SEARCH_BY_TYPE_ENDPOINT, SEARCH_COMPLETE_ENDPOINT
from pymusic._transport import Transport
from pymusic.cancel import CancelToken
from pymusic.models.requests import SearchByTypeParams, SearchCompleteParams


async def fetch_search_suggestions(
    transport: Transport,
    params: SearchCompleteParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    return await get_json(transport, SEARCH_COMPLETE_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)


async def fetch_search_by_type(
    transport: Transport,
    params: SearchByTypeParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    """Search *keyword* restricted to a result ``type`` (songs, albums, MVs, ...)."""
    return await get_json(transport, SEARCH_BY_TYPE_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)
