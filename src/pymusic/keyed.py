"""Resolution of responses keyed by the requested identifier.

Media endpoints answer ``{"data": {"<requested id>": {...}}}`` instead of a
fixed field name. The helpers here pick the right entry and degrade to the
first entry when the server keyed the payload differently. They never raise
for missing data: absence is always ``None``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, NamedTuple, TypeVar

from pymusic.models._base import KeyedResponse

_logger = logging.getLogger(__name__)

V = TypeVar("V")


class KeyedEntry(NamedTuple, Generic[V]):
    key: str
    value: V


@dataclass(frozen=True, slots=True)
class KeyedResolution(Generic[V]):
    """Outcome of :func:`resolve_keyed`.

    ``degraded`` is ``True`` when the requested key was missing and the
    first entry of the response was used instead. That is a recovered
    outcome, not an error: render ``value`` together with ``notice``.
    """

    requested_key: str
    key: str
    value: V

    @property
    def degraded(self) -> bool:
        return self.key != self.requested_key

    @property
    def notice(self) -> str | None:
        if not self.degraded:
            return None
        return f"Requested {self.requested_key!r} was not found; showing {self.key!r} instead"


def _entries(response: KeyedResponse[V] | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(response, KeyedResponse):
        return response.data
    data = response.get("data") if isinstance(response, Mapping) else None
    return data if isinstance(data, Mapping) else {}


def resolve_by_key(response: KeyedResponse[V] | Mapping[str, Any], key: str) -> V | None:
    """Return the entry for *key*, or ``None`` when absent or null."""
    return _entries(response).get(key)


def resolve_first(response: KeyedResponse[V] | Mapping[str, Any]) -> KeyedEntry[V] | None:
    """Return the first non-null entry in mapping order, or ``None``."""
    for key, value in _entries(response).items():
        if value is not None:
            return KeyedEntry(str(key), value)
    return None


def resolve_keyed(
    response: KeyedResponse[V] | Mapping[str, Any],
    key: str,
    *,
    label: str = "response",
) -> KeyedResolution[V] | None:
    """Resolve *key*, falling back to the first entry.

    Returns ``None`` when neither the key nor any other entry is present,
    which callers treat as "resource not found".
    """
    value = resolve_by_key(response, key)
    if value is not None:
        return KeyedResolution(requested_key=key, key=key, value=value)

    first = resolve_first(response)
    if first is None:
        _logger.debug("%s: no entry for %r", label, key)
        return None

    _logger.warning("%s: requested key %r not found, using %r", label, key, first.key)
    return KeyedResolution(requested_key=key, key=first.key, value=first.value)
