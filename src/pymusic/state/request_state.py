"""Immutable snapshot of one request coordinator."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

T = TypeVar("T")


class RequestState(BaseModel, Generic[T]):
    """``{data, loading, error}`` as observed by subscribers.

    ``loading`` implies ``error is None``: starting a call clears the
    previous error, and recording an error always ends loading.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: T | None = None
    loading: bool = False
    error: BaseException | None = None

    @model_validator(mode="after")
    def _loading_clears_error(self) -> RequestState[T]:
        if self.loading and self.error is not None:
            raise ValueError("a loading state cannot carry an error")
        return self

    @property
    def is_idle(self) -> bool:
        return not self.loading and self.data is None and self.error is None
