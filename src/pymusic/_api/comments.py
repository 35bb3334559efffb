"""Comment endpoints.

Endpoint:
  - /comment/getHotComments
"""

from __future__ import annotations

import logging
from typing import Any

from pymusic._api._common import get_json
from pymusic._constants import HOT_COMMENTS_ENDPOINT
from pymusic._transport import Transport
from pymusic.cancel import CancelToken
from pymusic.models.requests import HotCommentsParams

_logger = logging.getLogger(__name__)


async def fetch_hot_comments(
    transport: Transport,
    params: HotCommentsParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    """Fetch one page of hot comments for a song or MV (``biz_id``)."""
    body = await get_json(transport, HOT_COMMENTS_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)
    _logger.debug("Hot comments biz_id=%s page=%s", params.biz_id, params.page_num)
    return body
