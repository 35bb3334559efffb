"""HTTP transport with per-request settings snapshot and cancellation."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any, Protocol

import aiohttp

from pymusic._redact import redact_for_log
from pymusic.cancel import DEFAULT_CANCEL_REASON, CancelToken
from pymusic.config import ApiSettings
from pymusic.exceptions import (
    MusicAuthenticationError,
    MusicCancelledError,
    MusicRateLimitError,
    MusicTransportError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What endpoint modules send requests through.

    ``request`` returns the decoded JSON body (``None`` for an empty one)
    and raises :class:`MusicTransportError` subclasses on failure. Auth and
    base URL are taken from the settings at call time. A ``cancel_token``
    that fires before the response arrives aborts the call with
    :class:`MusicCancelledError`.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
        cancel_token: CancelToken | None = None,
    ) -> Any:
        ...


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, str | int | float]:
    """Drop ``None`` values and stringify what aiohttp cannot encode."""
    cleaned: dict[str, str | int | float] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        elif isinstance(value, (str, int, float)):
            cleaned[key] = value
        else:
            cleaned[key] = str(value)
    return cleaned


def _status_error(status: int, url: str, text: str) -> MusicTransportError:
    message = f"HTTP {status} from {url}: {text[:200]}"
    if status == 401:
        _logger.warning("Authentication required for %s", url)
        return MusicAuthenticationError(message, status_code=status, url=url)
    if status == 429:
        _logger.warning("Rate limit exceeded for %s", url)
        return MusicRateLimitError(message, status_code=status, url=url)
    return MusicTransportError(message, status_code=status, url=url)


async def _race_cancel(task: asyncio.Task[Any], token: CancelToken, url: str) -> Any:
    """Await *task* unless *token* fires first."""
    waiter = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if task in done:
        return task.result()

    task.cancel()
    # The response, if any arrived in between, is discarded.
    await asyncio.gather(task, return_exceptions=True)
    raise MusicCancelledError(token.reason or DEFAULT_CANCEL_REASON, url=url)


class HttpTransport:
    """aiohttp transport reading :class:`ApiSettings` at dispatch time."""

    def __init__(self, settings: ApiSettings, http_session: aiohttp.ClientSession) -> None:
        self._settings = settings
        self._http = http_session

    def build_url(self, path: str) -> str:
        base_url = self._settings.require_base_url()
        return f"{base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
        cancel_token: CancelToken | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Base URL and auth headers are captured here, before the first
        await, so a concurrent ``set_auth`` never changes a request that
        has already been issued.
        """
        url = self.build_url(path)
        headers = self._settings.headers()
        query = _clean_params(params)
        method = method.upper()

        if cancel_token is not None and cancel_token.cancelled:
            raise MusicCancelledError(cancel_token.reason or DEFAULT_CANCEL_REASON, url=url)

        _logger.debug("%s %s params=%s", method, url, redact_for_log(query))

        send = self._send(method, url, headers=headers, query=query, json_body=json_body)
        if cancel_token is None:
            return await send
        return await _race_cancel(asyncio.ensure_future(send), cancel_token, url)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        query: dict[str, str | int | float],
        json_body: Any,
    ) -> Any:
        timeout = aiohttp.ClientTimeout(total=self._settings.timeout)
        try:
            async with self._http.request(
                method,
                url,
                params=query,
                json=json_body,
                headers=headers,
                timeout=timeout,
            ) as resp:
                status = resp.status
                body = await resp.read()
        except TimeoutError as exc:
            raise MusicTransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise MusicTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        _logger.debug("%s %s -> %d", method, url, status)

        if not 200 <= status < 300:
            raise _status_error(status, url, body.decode("utf-8", "replace"))

        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MusicTransportError(
                f"Undecodable body from {url}: {exc}",
                status_code=status,
                url=url,
            ) from exc

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise MusicTransportError(
                f"Invalid JSON from {url}: {text[:200]}",
                status_code=status,
                url=url,
            ) from exc

    async def stream_events(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> AsyncIterator[str]:
        """Yield the ``data:`` payloads of a server-sent event stream."""
        url = self.build_url(path)
        headers = self._settings.headers()
        headers["accept"] = "text/event-stream"
        query = _clean_params(params)

        _logger.debug("GET %s (event stream)", url)

        try:
            async with self._http.get(
                url,
                params=query,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=None, sock_connect=self._settings.timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise _status_error(resp.status, url, (await resp.read()).decode("utf-8", "replace"))
                async for raw_line in resp.content:
                    line = raw_line.decode("utf-8", "replace").rstrip("\r\n")
                    if line.startswith("data:"):
                        yield line[5:].lstrip()
        except aiohttp.ClientError as exc:
            raise MusicTransportError(f"Event stream {url} failed: {exc}", url=url) from exc
