"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow:
every network parameter (identifiers, paging, per-request cookie) is
carried explicitly, and :meth:`ApiParams.to_query` produces the query
string dict sent by the transport.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _non_empty(value: str, name: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError(f"{name} must be non-empty")
    return text


class ApiParams(BaseModel):
    """Base for request parameter models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    def to_query(self) -> dict[str, Any]:
        """Query parameters for the request, without ``None`` values."""
        return self.model_dump(exclude_none=True)


class CookieParams(ApiParams):
    """Params accepting an optional per-request auth cookie."""

    cookie: str | None = None


class PagingParams(CookieParams):
    page_num: str = "1"
    page_size: str = "10"

    @field_validator("page_num", "page_size", mode="before")
    @classmethod
    def _page_as_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 1:
                raise ValueError("paging values must be >= 1")
            return str(value)
        return value


class HotCommentsParams(PagingParams):
    biz_id: str

    @field_validator("biz_id")
    @classmethod
    def _biz_id_non_empty(cls, value: str) -> str:
        return _non_empty(value, "biz_id")


class SearchCompleteParams(CookieParams):
    keyword: str

    @field_validator("keyword")
    @classmethod
    def _keyword_non_empty(cls, value: str) -> str:
        return _non_empty(value, "keyword")


class SearchByTypeParams(SearchCompleteParams, PagingParams):
    type: int = Field(default=1, ge=0)
    page_size: str = "20"


class IdParams(CookieParams):
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _join_ids(cls, value: Any) -> Any:
        if isinstance(value, Sequence) and not isinstance(value, str):
            return ",".join(str(item).strip() for item in value if str(item).strip())
        return value

    @field_validator("id")
    @classmethod
    def _id_non_empty(cls, value: str) -> str:
        return _non_empty(value, "id")


class SongUrlsParams(IdParams):
    """Song ids; a list is sent comma-joined."""


class LyricParams(IdParams):
    pass


class SonglistParams(IdParams):
    pass


class UserSonglistParams(CookieParams):
    uin: str

    @field_validator("uin", mode="before")
    @classmethod
    def _uin_as_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("uin")
    @classmethod
    def _uin_non_empty(cls, value: str) -> str:
        return _non_empty(value, "uin")


class TopDetailParams(ApiParams):
    top_id: str

    @field_validator("top_id", mode="before")
    @classmethod
    def _top_id_as_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("top_id")
    @classmethod
    def _top_id_non_empty(cls, value: str) -> str:
        return _non_empty(value, "top_id")


class MvParams(CookieParams):
    """A single MV id. The response ``data`` is keyed by this value."""

    vids: str

    @field_validator("vids")
    @classmethod
    def _vids_non_empty(cls, value: str) -> str:
        return _non_empty(value, "vids")
