"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlsplit

from .api.const import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from .exceptions import ConfigError

ENV_API_URL = "MOTORENT_API_URL"
ENV_TIMEOUT = "MOTORENT_TIMEOUT"
ENV_STATE_FILE = "MOTORENT_STATE_FILE"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    base_url: str
    api_uri: str = ""
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    retry_count: int = 0
    state_file: str | None = None

    @classmethod
    def from_url(cls, url: str, **kwargs) -> ClientConfig:
        """Split a full API URL such as ``http://host:8000/api/v1`` into base URL and API prefix."""
        if not isinstance(url, str) or not url.strip():
            raise ConfigError("API URL must be a non-empty string.")
        parts = urlsplit(url.strip())
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError("API URL must be an absolute http(s) URL.")
        return cls(
            base_url=f"{parts.scheme}://{parts.netloc}",
            api_uri=parts.path,
            **kwargs,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        env = os.environ if environ is None else environ
        url = env.get(ENV_API_URL) or DEFAULT_API_URL
        raw_timeout = env.get(ENV_TIMEOUT)
        timeout = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigError(f"{ENV_TIMEOUT} must be a number of seconds.") from exc
            if timeout <= 0:
                raise ConfigError(f"{ENV_TIMEOUT} must be positive.")
        return cls.from_url(url, timeout=timeout, state_file=env.get(ENV_STATE_FILE) or None)
