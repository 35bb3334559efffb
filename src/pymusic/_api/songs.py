"""Song endpoints.

Endpoints:
  - /song/getSongUrls
  - /lyric/getLyric
"""

from __future__ import annotations

from typing import Any

from pymusic._api._common import get_json
from pymusic._constants import LYRIC_ENDPOINT, SONG_URLS_ENDPOINT
from pymusic._transport import Transport
from pymusic.cancel import CancelToken
from pymusic.models.requests import LyricParams, SongUrlsParams


async def fetch_song_urls(
    transport: Transport,
    params: SongUrlsParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    """Fetch playback URLs for one or more comma-joined song ids."""
    return await get_json(transport, SONG_URLS_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)


async def fetch_lyric(
    transport: Transport,
    params: LyricParams,
    *,
    cancel_token: CancelToken | None = None,
) -> Any:
    return await get_json(transport, LYRIC_ENDPOINT, params=params.to_query(), cancel_token=cancel_token)
