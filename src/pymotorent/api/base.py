"""Transport shared by every API call."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import aiohttp

from ..exceptions import ApiError, AuthError, NetworkError, NotFoundError, ValidationError
from .const import DEFAULT_HEADERS, DEFAULT_TIMEOUT_SECONDS, NO_REFRESH_PATHS, REFRESH_TOKEN_ENDPOINT

_LOGGER = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=DEFAULT_TIMEOUT_SECONDS)

# (field name, value, filename, content type); filename and content type may be None.
FormField = tuple[str, Any, str | None, str | None]


class BaseApi:
    """HTTP transport: URL building, envelope decoding and error mapping."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        self._session = session
        self._base_url = self._normalize_base_url(base_url)
        self._api_uri = self._normalize_api_uri(api_uri)
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)
        self._refresh_lock = asyncio.Lock()
        self._refresh_generation = 0
        self.on_session_expired: Callable[[], None] | None = None

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building API requests.")
        if self._base_url is None:
            raise ValidationError("base_url is required to build API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._api_uri}{normalized_path}"

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: Mapping[str, Any] | None = None,
        form: Sequence[FormField] | None = None,
        allow_refresh: bool = True,
    ) -> Any:
        url = self._build_url(path)
        can_refresh = allow_refresh and path not in NO_REFRESH_PATHS
        generation = self._refresh_generation
        try:
            return await self._request(method, url, json=json, params=params, form=form)
        except AuthError as exc:
            if not can_refresh or exc.error_code != "unauthorized":
                raise
        _LOGGER.warning("Access token rejected for %s %s, refreshing session", method, path)
        await self._refresh_access_token(generation)
        return await self._request(method, url, json=json, params=params, form=form)

    async def _refresh_access_token(self, generation: int) -> None:
        """Refresh once for every request that saw the same expired token."""
        async with self._refresh_lock:
            if self._refresh_generation != generation:
                return
            try:
                await self._request("POST", self._build_url(REFRESH_TOKEN_ENDPOINT))
            except AuthError:
                _LOGGER.warning("Session refresh failed")
                if self.on_session_expired is not None:
                    self.on_session_expired()
                raise
            self._refresh_generation += 1

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any | None = None,
        params: Mapping[str, Any] | None = None,
        form: Sequence[FormField] | None = None,
    ) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        request_kwargs: dict[str, Any] = {"headers": dict(DEFAULT_HEADERS)}
        if json is not None:
            request_kwargs["json"] = json
        if params is not None:
            request_kwargs["params"] = self._clean_params(params)
        for attempt in range(attempts):
            if form is not None:
                request_kwargs["data"] = self._build_form(form)
            try:
                async with self._session.request(
                    method,
                    url,
                    timeout=self._timeout,
                    **request_kwargs,
                ) as response:
                    await self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ApiError(
                            "Response did not contain valid JSON.",
                            status=response.status,
                        ) from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.debug("Retrying %s %s after transport error", method, url)
        raise ApiError("Request failed.")

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        message = await self._error_message_from_response(response)
        if response.status == 401:
            raise AuthError(
                "Authentication failed.",
                error_code="unauthorized",
                user_message=message,
            )
        if response.status == 403:
            raise AuthError("Permission denied.", error_code="forbidden", user_message=message)
        if response.status == 404:
            raise NotFoundError("Resource not found.", user_message=message)
        raise ApiError(
            f"API request failed with status {response.status}.",
            status=response.status,
            user_message=message,
        )

    async def _error_message_from_response(self, response: aiohttp.ClientResponse) -> str | None:
        try:
            data = await response.json()
        except (aiohttp.ContentTypeError, ValueError):
            return None
        if isinstance(data, dict):
            message = data.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        return None

    def _build_form(self, fields: Sequence[FormField]) -> aiohttp.FormData:
        form = aiohttp.FormData()
        for name, value, filename, content_type in fields:
            if filename is None:
                form.add_field(name, str(value))
            else:
                form.add_field(name, value, filename=filename, content_type=content_type)
        return form

    def _clean_params(self, params: Mapping[str, Any]) -> dict[str, str]:
        cleaned: dict[str, str] = {}
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, bool):
                cleaned[key] = "true" if value else "false"
            else:
                cleaned[key] = str(value)
        return cleaned

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _normalize_api_uri(self, api_uri: str | None) -> str:
        if api_uri is None:
            return ""
        if not isinstance(api_uri, str):
            raise ValidationError("api_uri must be a string.")
        normalized = api_uri.strip().strip("/")
        if not normalized:
            return ""
        return f"/{normalized}"
