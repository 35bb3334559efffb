"""High-level async client for the music API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

import aiohttp

from pymusic._api import comments as _comments_api
from pymusic._api import login as _login_api
from pymusic._api import playlists as _playlists_api
from pymusic._api import search as _search_api
from pymusic._api import songs as _songs_api
from pymusic._api import toplists as _toplists_api
from pymusic._client import media as _media
from pymusic._client.media import MvBatchItem, MvFullInfo
from pymusic._transport import HttpTransport, Transport
from pymusic.cancel import CancelToken
from pymusic.config import ApiSettings, MusicConfig
from pymusic.exceptions import MusicConfigError, MusicError
from pymusic.keyed import KeyedResolution
from pymusic.models.mv import MvDetail, MvFormat, MvQuality, MvUrls
from pymusic.models.requests import (
    HotCommentsParams,
    LyricParams,
    MvParams,
    SearchByTypeParams,
    SearchCompleteParams,
    SonglistParams,
    SongUrlsParams,
    TopDetailParams,
    UserSonglistParams,
)
from pymusic.variants import get_best_variant_url, get_variant_url, list_available_variants

_logger = logging.getLogger(__name__)


class MusicClient:
    """Async client for the music API.

    Usage::

        async with MusicClient(MusicConfig(base_url="http://localhost:3200")) as client:
            client.set_auth(cookie="uin=...; qm_keyst=...")
            url = await client.get_best_mv_play_url("v0011j2cefa")

    Base URL and auth live in :attr:`settings`, which every request reads
    at dispatch time.
    """

    def __init__(
        self,
        config: MusicConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or MusicConfig()
        self.settings = ApiSettings(self._config)
        self._external_session = session is not None
        self._http_session = session
        self._injected_transport = transport is not None
        self._transport: Transport | None = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> MusicClient:
        if self._injected_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self.settings, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._injected_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_base_url(self, url: str) -> None:
        """Set the base URL; takes effect on the next issued request."""
        self.settings.set_base_url(url)

    def set_auth(self, cookie: str | None = None, token: str | None = None) -> None:
        """Set the cookie and/or bearer token; takes effect on the next issued request."""
        self.settings.set_auth(cookie, token)

    def clear_auth(self) -> None:
        self.settings.clear_auth()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise MusicError("Client not initialized. Use 'async with MusicClient(...) as client:'")
        return self._transport

    async def request_raw(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> Any:
        """Send a request to an endpoint without a typed wrapper."""
        return await self._require_transport().request(method, path, params=params, cancel_token=cancel_token)

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_hot_comments(self, params: HotCommentsParams, *, cancel_token: CancelToken | None = None) -> Any:
        return await _comments_api.fetch_hot_comments(self._require_transport(), params, cancel_token=cancel_token)

    async def search_complete(self, params: SearchCompleteParams, *, cancel_token: CancelToken | None = None) -> Any:
        """Fetch search suggestions for a partial keyword."""
        return await _search_api.fetch_search_suggestions(self._require_transport(), params, cancel_token=cancel_token)

    async def search_by_type(self, params: SearchByTypeParams, *, cancel_token: CancelToken | None = None) -> Any:
        return await _search_api.fetch_search_by_type(self._require_transport(), params, cancel_token=cancel_token)

    async def get_song_urls(self, params: SongUrlsParams, *, cancel_token: CancelToken | None = None) -> Any:
        return await _songs_api.fetch_song_urls(self._require_transport(), params, cancel_token=cancel_token)

    async def get_lyric(self, params: LyricParams, *, cancel_token: CancelToken | None = None) -> Any:
        return await _songs_api.fetch_lyric(self._require_transport(), params, cancel_token=cancel_token)

    async def get_user_created_songlist(
        self,
        params: UserSonglistParams,
        *,
        cancel_token: CancelToken | None = None,
    ) -> Any:
        return await _playlists_api.fetch_user_created_songlist(
            self._require_transport(),
            params,
            cancel_token=cancel_token,
        )

    async def get_songlist(self, params: SonglistParams, *, cancel_token: CancelToken | None = None) -> Any:
        return await _playlists_api.fetch_songlist(self._require_transport(), params, cancel_token=cancel_token)

    async def get_top_categories(self, *, cancel_token: CancelToken | None = None) -> Any:
        return await _toplists_api.fetch_top_categories(self._require_transport(), cancel_token=cancel_token)

    async def get_top_detail(self, params: TopDetailParams, *, cancel_token: CancelToken | None = None) -> Any:
        return await _toplists_api.fetch_top_detail(self._require_transport(), params, cancel_token=cancel_token)

    # ------------------------------------------------------------------
    # MV endpoints
    # ------------------------------------------------------------------

    async def resolve_mv_detail(
        self,
        vids: str | MvParams,
        cookie: str | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> KeyedResolution[MvDetail] | None:
        """Resolve an MV detail, reporting whether a fallback key was used.

        Returns ``None`` when the response holds no entry at all.
        """
        return await _media.resolve_mv_detail(self, _media.mv_params(vids, cookie), cancel_token=cancel_token)

    async def resolve_mv_urls(
        self,
        vids: str | MvParams,
        cookie: str | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> KeyedResolution[MvUrls] | None:
        return await _media.resolve_mv_urls(self, _media.mv_params(vids, cookie), cancel_token=cancel_token)

    async def get_mv_detail(self, vids: str | MvParams, cookie: str | None = None) -> MvDetail | None:
        resolution = await self.resolve_mv_detail(vids, cookie)
        return resolution.value if resolution is not None else None

    async def get_mv_urls(self, vids: str | MvParams, cookie: str | None = None) -> MvUrls | None:
        resolution = await self.resolve_mv_urls(vids, cookie)
        return resolution.value if resolution is not None else None

    async def get_mv_play_url(
        self,
        vids: str | MvParams,
        format: MvFormat | str = MvFormat.MP4,
        quality: MvQuality | str = MvQuality.Q30,
        cookie: str | None = None,
    ) -> str | None:
        """URL for an exact format and quality, or ``None``."""
        urls = await self.get_mv_urls(vids, cookie)
        return get_variant_url(urls, format, quality) if urls is not None else None

    async def get_best_mv_play_url(
        self,
        vids: str | MvParams,
        format: MvFormat | str = MvFormat.MP4,
        cookie: str | None = None,
    ) -> str | None:
        """URL of the highest available quality for *format*, or ``None``."""
        urls = await self.get_mv_urls(vids, cookie)
        return get_best_variant_url(urls, format) if urls is not None else None

    async def get_available_mv_qualities(
        self,
        vids: str | MvParams,
        format: MvFormat | str = MvFormat.MP4,
        cookie: str | None = None,
    ) -> list[MvQuality]:
        urls = await self.get_mv_urls(vids, cookie)
        return list_available_variants(urls, format) if urls is not None else []

    async def get_mv_full_info(self, vids: str | MvParams, cookie: str | None = None) -> MvFullInfo | None:
        """Fetch detail and URLs concurrently; ``None`` when the detail is not found."""
        return await _media.get_mv_full_info(self, _media.mv_params(vids, cookie))

    async def get_batch_mv_details(self, vids_list: list[str], cookie: str | None = None) -> list[MvBatchItem]:
        """Fetch many MV details concurrently.

        A failing id yields ``data=None`` instead of failing the batch.
        """
        return await _media.get_batch_mv_details(self, vids_list, cookie)

    async def validate_mv_id(self, vids: str | MvParams, cookie: str | None = None) -> bool:
        return await _media.validate_mv_id(self, _media.mv_params(vids, cookie))

    # ------------------------------------------------------------------
    # QR login
    # ------------------------------------------------------------------

    async def start_qrcode_login(self, *, cancel_token: CancelToken | None = None) -> Any:
        return await _login_api.start_qrcode_login(self._require_transport(), cancel_token=cancel_token)

    async def subscribe_qrcode(self) -> AsyncIterator[Any]:
        """Yield QR login status events (server-sent events)."""
        transport = self._require_transport()
        if not isinstance(transport, HttpTransport):
            raise MusicConfigError("QR login subscription needs the HTTP transport")
        async for event in _login_api.subscribe_qrcode(transport):
            yield event
