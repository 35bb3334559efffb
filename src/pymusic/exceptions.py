"""Custom exception hierarchy for pymusic."""

from __future__ import annotations


class MusicError(Exception):
    """Base exception for all pymusic errors."""


class MusicConfigError(MusicError):
    """Invalid or missing configuration."""


class MusicTransportError(MusicError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class MusicAuthenticationError(MusicTransportError):
    """Server answered 401; the cookie or token is missing or rejected."""


class MusicRateLimitError(MusicTransportError):
    """Server answered 429."""


class MusicCancelledError(MusicTransportError):
    """Request aborted through its :class:`~pymusic.cancel.CancelToken`.

    Surfaces like any other transport failure so request coordinators
    store it as ``error``; the type itself is the cancellation marker.
    """

    def __init__(self, reason: str, *, url: str = "") -> None:
        self.reason = reason
        super().__init__(f"Request to {url or '<unknown>'} cancelled: {reason}", url=url)


class MusicApiError(MusicError):
    """API returned a non-success envelope ``code`` (application-level error)."""

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)
