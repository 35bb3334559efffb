"""MV (music video) models."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pymusic.models._base import MusicBaseModel


class MvFormat(StrEnum):
    """Encoding formats of an MV variant matrix."""

    MP4 = "mp4"
    """Primary format (progressive download)."""
    HLS = "hls"
    """Alternate format (HTTP live streaming)."""


class MvQuality(StrEnum):
    """Quality levels of an MV variant matrix, lowest to highest."""

    Q10 = "10"
    Q20 = "20"
    Q30 = "30"
    Q40 = "40"


class MvSinger(MusicBaseModel):
    """An artist credited on an MV."""

    mid: str = ""
    name: str = ""
    id: int | None = None


class MvDetail(MusicBaseModel):
    """Detail of a single MV.

    Only commonly present fields are typed; everything else stays in ``raw``.
    """

    vid: str = Field(default="", validation_alias=AliasChoices("vid", "vids", "mv_id"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "title", "mv_name"))
    desc: str = Field(default="", validation_alias=AliasChoices("desc", "description"))
    cover_pic: str = Field(default="", validation_alias=AliasChoices("cover_pic", "coverPic", "picurl"))
    duration: int | None = Field(default=None, validation_alias=AliasChoices("duration", "interval"))
    """Duration in seconds."""
    play_count: int | None = Field(default=None, validation_alias=AliasChoices("playcnt", "play_count", "listennum"))
    pubdate: int | None = Field(default=None, validation_alias=AliasChoices("pubdate", "publish_date"))
    """Publish time, epoch seconds."""
    singers: list[MvSinger] = Field(default_factory=list, validation_alias=AliasChoices("singers", "singer"))


def _coerce_quality_map(value: Any) -> dict[str, str | None]:
    """Normalize one format row of the variant matrix.

    Keys become quality strings; anything that is not a non-empty string
    URL becomes ``None`` (absent cell).
    """
    if not isinstance(value, Mapping):
        return {}
    row: dict[str, str | None] = {}
    for quality, url in value.items():
        row[str(quality)] = url.strip() if isinstance(url, str) and url.strip() else None
    return row


class MvUrls(MusicBaseModel):
    """Playback URLs of an MV as a format x quality matrix.

    Either format may be missing entirely and any cell may be absent.
    """

    mp4: dict[str, str | None] = Field(default_factory=dict)
    hls: dict[str, str | None] = Field(default_factory=dict)

    @field_validator("mp4", "hls", mode="before")
    @classmethod
    def _coerce_rows(cls, value: Any) -> dict[str, str | None]:
        return _coerce_quality_map(value)

    @property
    def variants(self) -> dict[str, dict[str, str | None]]:
        """The variant matrix keyed by format value."""
        return {MvFormat.MP4.value: dict(self.mp4), MvFormat.HLS.value: dict(self.hls)}
