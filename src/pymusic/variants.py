"""Quality/format negotiation over an MV variant matrix.

The matrix is ``{format: {quality: url | None}}`` and is partial: any
format row or quality cell may be missing. Only a non-empty string counts
as an available URL. Lookups never raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pymusic.models.mv import MvFormat, MvQuality, MvUrls

#: Fixed quality priority, highest first. Consulted against the matrix,
#: never derived from the keys it happens to contain.
QUALITY_PRIORITY: tuple[MvQuality, ...] = (MvQuality.Q40, MvQuality.Q30, MvQuality.Q20, MvQuality.Q10)

VariantMatrix = Mapping[str, Mapping[str, Any] | None]


def _row(matrix: VariantMatrix | MvUrls, format: MvFormat | str) -> Mapping[str, Any]:
    if isinstance(matrix, MvUrls):
        matrix = matrix.variants
    row = matrix.get(str(format))
    return row if isinstance(row, Mapping) else {}


def get_variant_url(
    matrix: VariantMatrix | MvUrls,
    format: MvFormat | str = MvFormat.MP4,
    quality: MvQuality | str = MvQuality.Q30,
) -> str | None:
    """URL at (*format*, *quality*), or ``None`` when the cell is absent or empty."""
    url = _row(matrix, format).get(str(quality))
    if isinstance(url, str) and url:
        return url
    return None


def list_available_variants(
    matrix: VariantMatrix | MvUrls,
    format: MvFormat | str = MvFormat.MP4,
) -> list[MvQuality]:
    """Qualities with a URL for *format*, in :data:`QUALITY_PRIORITY` order."""
    return [quality for quality in QUALITY_PRIORITY if get_variant_url(matrix, format, quality)]


def get_best_variant_url(
    matrix: VariantMatrix | MvUrls,
    format: MvFormat | str = MvFormat.MP4,
) -> str | None:
    """URL of the highest available quality for *format*, or ``None``."""
    for quality in QUALITY_PRIORITY:
        url = get_variant_url(matrix, format, quality)
        if url:
            return url
    return None
