"""Client configuration for pymusic."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pymusic._constants import DEFAULT_TIMEOUT, USER_AGENT
from pymusic.exceptions import MusicConfigError


@dataclasses.dataclass(frozen=True)
class MusicConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL. May be left empty and set later through
        :meth:`ApiSettings.set_base_url`, but must be set before the
        first request is issued.
    timeout : float
        Total request timeout in seconds.
    cookie : str or None
        Initial ``Cookie`` header value.
    token : str or None
        Initial bearer token for the ``Authorization`` header.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    cookie: str | None = None
    token: str | None = None
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls, **overrides: Any) -> MusicConfig:
        """Create configuration from environment variables.

        Reads ``MUSIC_API_BASE_URL``, ``MUSIC_API_COOKIE``,
        ``MUSIC_API_TOKEN``, ``MUSIC_API_TIMEOUT`` and
        ``MUSIC_API_USER_AGENT``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "MUSIC_API_BASE_URL": "base_url",
            "MUSIC_API_COOKIE": "cookie",
            "MUSIC_API_TOKEN": "token",
            "MUSIC_API_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # timeout is numeric, handle separately
        timeout_env = env.get("MUSIC_API_TIMEOUT")
        if timeout_env is not None and "timeout" not in overrides:
            try:
                config_kwargs["timeout"] = float(timeout_env)
            except ValueError as exc:
                raise MusicConfigError(f"MUSIC_API_TIMEOUT is not a number: {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)


class ApiSettings:
    """Mutable transport settings shared by every request of one client.

    Holds the base URL and the auth headers. Every request reads these at
    dispatch time, so an update takes effect on the next issued request
    only; requests already in flight keep the headers they were sent
    with. There is no locking: avoid reconfiguring in the middle of a
    burst of requests when per-request auth consistency matters.
    """

    def __init__(self, config: MusicConfig | None = None) -> None:
        config = config or MusicConfig()
        self._base_url = config.base_url.rstrip("/")
        self._cookie = config.cookie or None
        self._token = config.token or None
        self.timeout = config.timeout
        self.user_agent = config.user_agent

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def cookie(self) -> str | None:
        return self._cookie

    @property
    def token(self) -> str | None:
        return self._token

    def set_base_url(self, url: str) -> None:
        """Set the API base URL used by subsequent requests."""
        self._base_url = url.strip().rstrip("/")

    def set_auth(self, cookie: str | None = None, token: str | None = None) -> None:
        """Set the cookie and/or bearer token.

        Each argument is applied only when given; passing ``None`` keeps
        the current value. Use :meth:`clear_auth` to drop credentials.
        """
        if cookie:
            self._cookie = cookie
        if token:
            self._token = token

    def clear_auth(self) -> None:
        self._cookie = None
        self._token = None

    def require_base_url(self) -> str:
        if not self._base_url:
            raise MusicConfigError("Base URL is not configured. Call set_base_url() before the first request.")
        return self._base_url

    def headers(self) -> dict[str, str]:
        """Snapshot of the headers to send with a request issued now."""
        headers: dict[str, str] = {
            "content-type": "application/json",
            "user-agent": self.user_agent,
        }
        if self._cookie:
            headers["cookie"] = self._cookie
        if self._token:
            headers["authorization"] = f"Bearer {self._token}"
        return headers
