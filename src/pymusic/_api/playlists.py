"""Playlist (songlist) endpoints.

Endpoints:
  - /user/getCreatedSonglist
  - /songlist/getSonglist
"""

from __future__ import annotations

from typing import Any

from pymusic._api._common import get_json
from pymusic._constants import SONGLIST_ENDPOINT, USER_SONGLIST_ENDPOINT
from pymusic._transport import Transport
from pymusic.cancel import CancelToken
from pymusic.models.requests import SonglistParams, UserSonglistParams


async def fetch_user_created_songlist(
    transport: Transport,
    params: UserSonglistParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    """Fetch the playlists created by user ``uin``."""
    return await get_json(transport, USER_SONGLIST_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)


async def fetch_songlist(
    transport: Transport,
    params: SonglistParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    """Fetch the songs of playlist ``id``."""
    return await get_json(transport, SONGLIST_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)
