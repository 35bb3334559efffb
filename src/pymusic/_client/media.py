"""Internal MV operations for :class:`pymusic.client.MusicClient`.

These compose the keyed resolver and the variant negotiator on top of the
two MV endpoints. They keep `client.py` small without changing the
public API.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from pymusic._api import mv as _mv_api
from pymusic.cancel import CancelToken
from pymusic.exceptions import MusicError
from pymusic.keyed import KeyedResolution
from pymusic.models.mv import MvDetail, MvFormat, MvQuality, MvUrls
from pymusic.models.requests import MvParams
from pymusic.variants import get_best_variant_url, get_variant_url, list_available_variants

if TYPE_CHECKING:
    from pymusic.client import MusicClient

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MvFullInfo:
    """Detail and playback URLs of one MV, fetched together."""

    detail: MvDetail
    urls: MvUrls | None
    notice: str | None = None
    """Advisory text when either lookup fell back to another key."""

    def best_url(self, format: MvFormat | str = MvFormat.MP4) -> str | None:
        return get_best_variant_url(self.urls, format) if self.urls else None

    def url(
        self,
        format: MvFormat | str = MvFormat.MP4,
        quality: MvQuality | str = MvQuality.Q30,
    ) -> str | None:
        return get_variant_url(self.urls, format, quality) if self.urls else None

    def available_qualities(self, format: MvFormat | str = MvFormat.MP4) -> list[MvQuality]:
        return list_available_variants(self.urls, format) if self.urls else []


class MvBatchItem(NamedTuple):
    vids: str
    data: MvDetail | None


def mv_params(vids: str | MvParams, cookie: str | None = None) -> MvParams:
    if isinstance(vids, MvParams):
        return vids
    return MvParams(vids=vids, cookie=cookie)


async def resolve_mv_detail(
    client: MusicClient,
    params: MvParams,
    *,
    cancel_token: CancelToken | None = None,
) -> KeyedResolution[MvDetail] | None:
    return await _mv_api.resolve_mv_detail(client._require_transport(), params, cancel_token=cancel_token)


async def resolve_mv_urls(
    client: MusicClient,
    params: MvParams,
    *,
    cancel_token: CancelToken | None = None,
) -> KeyedResolution[MvUrls] | None:
    return await _mv_api.resolve_mv_urls(client._require_transport(), params, cancel_token=cancel_token)


async def get_mv_full_info(client: MusicClient, params: MvParams) -> MvFullInfo | None:
    detail, urls = await asyncio.gather(
        resolve_mv_detail(client, params),
        resolve_mv_urls(client, params),
    )
    if detail is None:
        _logger.debug("MV %s not found", params.vids)
        return None
    notices = [resolution.notice for resolution in (detail, urls) if resolution is not None and resolution.notice]
    return MvFullInfo(
        detail=detail.value,
        urls=urls.value if urls is not None else None,
        notice="; ".join(notices) or None,
    )


async def get_batch_mv_details(
    client: MusicClient,
    vids_list: list[str],
    cookie: str | None = None,
) -> list[MvBatchItem]:
    async def _one(vids: str) -> MvBatchItem:
        try:
            resolution = await resolve_mv_detail(client, MvParams(vids=vids, cookie=cookie))
        except MusicError:
            _logger.debug("MV detail for %s failed", vids, exc_info=True)
            return MvBatchItem(vids, None)
        return MvBatchItem(vids, resolution.value if resolution is not None else None)

    return list(await asyncio.gather(*(_one(vids) for vids in vids_list)))


async def validate_mv_id(client: MusicClient, params: MvParams) -> bool:
    try:
        resolution = await resolve_mv_detail(client, params)
    except MusicError:
        _logger.debug("MV id %s could not be validated", params.vids, exc_info=True)
        return False
    return resolution is not None
