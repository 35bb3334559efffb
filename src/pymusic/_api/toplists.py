"""Top list (chart) endpoints.

Endpoints:
  - /top/getTopCategory
  - /top/getDetail
"""

from __future__ import annotations

from typing import Any

from pymusic._api._common import get_json
from pymusic._constants import TOP_CATEGORY_ENDPOINT, TOP_DETAIL_ENDPOINT
from pymusic._transport import Transport
from pymusic.cancel import CancelToken
from pymusic.models.requests import TopDetailParams


async def fetch_top_categories(
    transport: Transport,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    return await get_json(transport, TOP_CATEGORY_ENDPOINT, cancel_token=cancel_token)


async def fetch_top_detail(
    transport: Transport,
    params: TopDetailParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    return await get_json(transport, TOP_DETAIL_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)
