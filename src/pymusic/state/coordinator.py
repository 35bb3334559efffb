"""Request coordinator: one awaitable call bound to observable state.

This is the only component that catches and records asynchronous
failures. Resolution misses are plain ``None`` results and never reach
the ``error`` field.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from pymusic.cancel import DEFAULT_CANCEL_REASON, CancelToken
from pymusic.state.request_state import RequestState

_logger = logging.getLogger(__name__)

T = TypeVar("T")

StateCallback = Callable[[RequestState[Any]], None]


class RequestCoordinator(Generic[T]):
    """Reactive container for the lifecycle of one kind of request.

    ``execute`` moves the state through ``loading`` to either ``data`` or
    ``error`` and notifies subscribers after every change.

    Overlapping calls are not serialized. With the default policy the call
    that *settles* last overwrites ``data``/``error``, whichever was issued
    first. Pass ``ignore_stale=True`` to drop completions of calls that
    were superseded by a later ``execute`` or by :meth:`reset`; superseded
    callers still receive their own result or exception.
    """

    def __init__(self, *, name: str = "request", ignore_stale: bool = False) -> None:
        self._name = name
        self._ignore_stale = ignore_stale
        self._state: RequestState[T] = RequestState()
        self._generation = 0
        self._inflight: dict[int, CancelToken] = {}
        self._subscribers: list[StateCallback] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def ignore_stale(self) -> bool:
        return self._ignore_stale

    @property
    def state(self) -> RequestState[T]:
        return self._state

    @property
    def data(self) -> T | None:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> BaseException | None:
        return self._state.error

    @property
    def in_flight(self) -> int:
        """Number of cancellable calls that have not settled yet."""
        return len(self._inflight)

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """Call *callback* with the new state after every change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._subscribers.remove(callback)

        return _unsubscribe

    def _set(self, **changes: Any) -> None:
        current = self._state
        self._state = RequestState(
            data=changes.get("data", current.data),
            loading=changes.get("loading", current.loading),
            error=changes.get("error", current.error),
        )
        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception:
                _logger.debug("%s: state subscriber failed", self._name, exc_info=True)

    def _accepts(self, call_id: int) -> bool:
        return not self._ignore_stale or call_id == self._generation

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        cancel_token: CancelToken | None = None,
    ) -> T:
        """Run *operation* and record its outcome.

        Failures are stored as ``error`` and re-raised; ``data`` keeps its
        previous value. *cancel_token* is the handle the operation's
        transport call watches; registering it here lets :meth:`cancel`
        abort the call.
        """
        self._generation += 1
        call_id = self._generation
        if cancel_token is not None:
            self._inflight[call_id] = cancel_token

        self._set(loading=True, error=None)
        try:
            result = await operation()
        except asyncio.CancelledError:
            # The awaiting task itself was cancelled; nothing to record.
            if self._accepts(call_id):
                self._set(loading=False)
            raise
        except Exception as exc:
            _logger.debug("%s failed: %s", self._name, exc, exc_info=True)
            if self._accepts(call_id):
                self._set(error=exc, loading=False)
            else:
                _logger.debug("%s: ignoring failure of superseded call %d", self._name, call_id)
            raise
        finally:
            self._inflight.pop(call_id, None)

        if self._accepts(call_id):
            self._set(data=result, error=None, loading=False)
        else:
            _logger.debug("%s: ignoring result of superseded call %d", self._name, call_id)
        return result

    def reset(self) -> None:
        """Return to ``{data: None, loading: False, error: None}``.

        In-flight calls are not cancelled. Under the default policy a call
        that settles later still overwrites the state; with
        ``ignore_stale`` it is dropped.
        """
        if self._ignore_stale:
            self._generation += 1
        self._set(data=None, error=None, loading=False)

    def cancel(self, reason: str = DEFAULT_CANCEL_REASON) -> int:
        """Fire the cancel token of every in-flight call.

        Each cancelled call fails with ``MusicCancelledError``, which is
        recorded as ``error`` like any other failure. Returns the number
        of tokens fired.
        """
        fired = 0
        for token in list(self._inflight.values()):
            if token.cancel(reason):
                fired += 1
        if fired:
            _logger.debug("%s: cancelled %d in-flight call(s)", self._name, fired)
        return fired

    def __repr__(self) -> str:
        state = self._state
        return (
            f"<RequestCoordinator {self._name} loading={state.loading} "
            f"error={type(state.error).__name__ if state.error else None} "
            f"has_data={state.data is not None}>"
        )
