"""Cancellation handles for in-flight requests."""

from __future__ import annotations

import asyncio

DEFAULT_CANCEL_REASON = "Request was cancelled"


class CancelToken:
    """One-shot cancellation handle passed alongside a request.

    The transport watches the token while the request is in flight and
    aborts it with :class:`~pymusic.exceptions.MusicCancelledError` once
    :meth:`cancel` is called. A token cancelled before dispatch aborts the
    request without touching the network.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str = DEFAULT_CANCEL_REASON) -> bool:
        """Fire the token. Returns ``False`` if it had already fired."""
        if self._event.is_set():
            return False
        self._reason = reason
        self._event.set()
        return True

    async def wait(self) -> str:
        """Block until the token fires and return the reason."""
        await self._event.wait()
        return self._reason or DEFAULT_CANCEL_REASON

    def __repr__(self) -> str:
        state = f"cancelled reason={self._reason!r}" if self.cancelled else "pending"
        return f"<CancelToken {state}>"
