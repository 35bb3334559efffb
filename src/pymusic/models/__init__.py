"""Data models for music API requests and responses."""

from pymusic.models._base import KeyedResponse, MusicBaseModel
from pymusic.models.mv import MvDetail, MvFormat, MvQuality, MvSinger, MvUrls
from pymusic.models.requests import (
    ApiParams,
    CookieParams,
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

__all__ = [
    "ApiParams",
    "CookieParams",
    "HotCommentsParams",
    "KeyedResponse",
    "LyricParams",
    "MusicBaseModel",
    "MvDetail",
    "MvFormat",
    "MvParams",
    "MvQuality",
    "MvSinger",
    "MvUrls",
    "SearchByTypeParams",
    "SearchCompleteParams",
    "SongUrlsParams",
    "SonglistParams",
    "TopDetailParams",
    "UserSonglistParams",
]
