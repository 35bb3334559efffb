"""Domain facades: one per API category.

Each facade owns one :class:`~pymusic.state.RequestCoordinator` per logical
call and a trigger method that runs the call through it. Consumers read
``facade.<coordinator>.data/loading/error``, subscribe to changes, and
call ``reset()`` or ``cancel()`` on the coordinator or the whole facade.

Usage::

    async with MusicClient(config) as client:
        mv = MvFacade(client)
        mv.urls.subscribe(render)
        await mv.get_mv_urls(MvParams(vids="v0011j2cefa"))
        print(mv.best_url())
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pymusic.cancel import DEFAULT_CANCEL_REASON, CancelToken
from pymusic.client import MusicClient
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
from pymusic.state import RequestCoordinator
from pymusic.variants import get_best_variant_url, get_variant_url, list_available_variants

T = TypeVar("T")


class _Facade:
    def __init__(self, client: MusicClient, *, ignore_stale: bool = False) -> None:
        self._client = client
        self._ignore_stale = ignore_stale
        self._coordinators: list[RequestCoordinator[Any]] = []

    def _coordinator(self, name: str) -> RequestCoordinator[Any]:
        coordinator: RequestCoordinator[Any] = RequestCoordinator(
            name=f"{type(self).__name__}.{name}",
            ignore_stale=self._ignore_stale,
        )
        self._coordinators.append(coordinator)
        return coordinator

    @staticmethod
    async def _run(
        coordinator: RequestCoordinator[Any],
        call: Callable[[CancelToken], Awaitable[T]],
    ) -> T:
        token = CancelToken()
        result: T = await coordinator.execute(lambda: call(token), cancel_token=token)
        return result

    @property
    def coordinators(self) -> tuple[RequestCoordinator[Any], ...]:
        return tuple(self._coordinators)

    def reset(self) -> None:
        """Reset every coordinator of this facade."""
        for coordinator in self._coordinators:
            coordinator.reset()

    def cancel(self, reason: str = DEFAULT_CANCEL_REASON) -> int:
        """Cancel every in-flight call of this facade."""
        return sum(coordinator.cancel(reason) for coordinator in self._coordinators)


class CommentFacade(_Facade):
    def __init__(self, client: MusicClient, *, ignore_stale: bool = False) -> None:
        super().__init__(client, ignore_stale=ignore_stale)
        self.comments = self._coordinator("comments")

    async def get_hot_comments(self, params: HotCommentsParams) -> Any:
        return await self._run(
            self.comments,
            lambda token: self._client.get_hot_comments(params, cancel_token=token),
        )


class SearchFacade(_Facade):
    def __init__(self, client: MusicClient, *, ignore_stale: bool = False) -> None:
        super().__init__(client, ignore_stale=ignore_stale)
        self.results = self._coordinator("results")
        self.suggestions = self._coordinator("suggestions")

    async def search_by_type(self, params: SearchByTypeParams) -> Any:
        return await self._run(
            self.results,
            lambda token: self._client.search_by_type(params, cancel_token=token),
        )

    async def search_complete(self, params: SearchCompleteParams) -> Any:
        return await self._run(
            self.suggestions,
            lambda token: self._client.search_complete(params, cancel_token=token),
        )


class SongFacade(_Facade):
    def __init__(self, client: MusicClient, *, ignore_stale: bool = False) -> None:
        super().__init__(client, ignore_stale=ignore_stale)
        self.urls = self._coordinator("urls")
        self.lyric = self._coordinator("lyric")

    async def get_song_urls(self, params: SongUrlsParams) -> Any:
        return await self._run(
            self.urls,
            lambda token: self._client.get_song_urls(params, cancel_token=token),
        )

    async def get_lyric(self, params: LyricParams) -> Any:
        return await self._run(
            self.lyric,
            lambda token: self._client.get_lyric(params, cancel_token=token),
        )


class PlaylistFacade(_Facade):
    def __init__(self, client: MusicClient, *, ignore_stale: bool = False) -> None:
        super().__init__(client, ignore_stale=ignore_stale)
        self.user_playlists = self._coordinator("user_playlists")
        self.playlist_songs = self._coordinator("playlist_songs")

    async def get_user_created_songlist(self, params: UserSonglistParams) -> Any:
        return await self._run(
            self.user_playlists,
            lambda token: self._client.get_user_created_songlist(params, cancel_token=token),
        )

    async def get_songlist(self, params: SonglistParams) -> Any:
        return await self._run(
            self.playlist_songs,
            lambda token: self._client.get_songlist(params, cancel_token=token),
        )


class ToplistFacade(_Facade):
    def __init__(self, client: MusicClient, *, ignore_stale: bool = False) -> None:
        super().__init__(client, ignore_stale=ignore_stale)
        self.categories = self._coordinator("categories")
        self.detail = self._coordinator("detail")

    async def get_top_categories(self) -> Any:
        return await self._run(
            self.categories,
            lambda token: self._client.get_top_categories(cancel_token=token),
        )

    async def get_top_detail(self, params: TopDetailParams) -> Any:
        return await self._run(
            self.detail,
            lambda token: self._client.get_top_detail(params, cancel_token=token),
        )


class MvFacade(_Facade):
    """MV detail and playback URLs.

    Both coordinators hold a :class:`~pymusic.keyed.KeyedResolution` on
    success, or ``None`` when the response had no entry ("not found",
    not an error). A resolution with ``degraded=True`` carries the
    advisory ``notice`` to show next to the fallback data.
    """

    def __init__(self, client: MusicClient, *, ignore_stale: bool = False) -> None:
        super().__init__(client, ignore_stale=ignore_stale)
        self.detail: RequestCoordinator[KeyedResolution[MvDetail] | None] = self._coordinator("detail")
        self.urls: RequestCoordinator[KeyedResolution[MvUrls] | None] = self._coordinator("urls")

    async def get_mv_detail(self, params: MvParams) -> KeyedResolution[MvDetail] | None:
        return await self._run(
            self.detail,
            lambda token: self._client.resolve_mv_detail(params, cancel_token=token),
        )

    async def get_mv_urls(self, params: MvParams) -> KeyedResolution[MvUrls] | None:
        return await self._run(
            self.urls,
            lambda token: self._client.resolve_mv_urls(params, cancel_token=token),
        )

    @property
    def _resolved_urls(self) -> MvUrls | None:
        resolution = self.urls.data
        return resolution.value if resolution is not None else None

    def url(
        self,
        format: MvFormat | str = MvFormat.MP4,
        quality: MvQuality | str = MvQuality.Q30,
    ) -> str | None:
        urls = self._resolved_urls
        return get_variant_url(urls, format, quality) if urls is not None else None

    def best_url(self, format: MvFormat | str = MvFormat.MP4) -> str | None:
        urls = self._resolved_urls
        return get_best_variant_url(urls, format) if urls is not None else None

    def available_qualities(self, format: MvFormat | str = MvFormat.MP4) -> list[MvQuality]:
        urls = self._resolved_urls
        return list_available_variants(urls, format) if urls is not None else []
