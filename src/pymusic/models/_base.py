"""Base models for music API responses.

Every entity model inherits from :class:`MusicBaseModel` which provides:

* frozen instances that ignore unknown keys, since the server adds
  fields freely;
* a ``model_validator(mode="before")`` that drops ``None`` and blank
  string values so the field default is used;
* a ``raw`` dict that captures the original payload.

Envelopes whose ``data`` mapping is keyed by the requested identifier
use :class:`KeyedResponse`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

V = TypeVar("V")


class MusicBaseModel(BaseModel):
    """Base for entity payloads (MV detail, MV urls, ...)."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API payload."""

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values
        cleaned = {
            key: value
            for key, value in values.items()
            if value is not None and not (isinstance(value, str) and not value.strip())
        }
        # Keep the caller's raw when constructing with kwargs that include raw=.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned


class KeyedResponse(BaseModel, Generic[V]):
    """Envelope whose ``data`` is keyed by the identifiers of the request.

    The keys are not known statically: a ``/mv/getDetail?vids=abc`` call
    answers ``{"data": {"abc": {...}}}``. The mapping may be empty on a
    nominally successful response, and entries may be ``null``; both
    count as "not found" for :mod:`pymusic.keyed`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: int = 0
    message: str = ""
    data: dict[str, V | None] = Field(default_factory=dict)
    timestamp: int = 0

    @field_validator("data", mode="before")
    @classmethod
    def _coerce_data(cls, value: Any) -> Any:
        # Some deployments answer an empty list instead of an empty object.
        if value is None or (isinstance(value, list) and not value):
            return {}
        return value

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str:
        return "" if value is None else str(value)
