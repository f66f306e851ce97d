"""Client facade owning the HTTP session, the API bindings and the app state."""

from __future__ import annotations

import aiohttp

from .api import RestApi
from .api.const import DEFAULT_API_URI, DEFAULT_TIMEOUT_SECONDS
from .config import ClientConfig
from .pricing import CouponPolarity
from .store import AppState, JsonFileStorage, Notifier, SnapshotStorage

_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=DEFAULT_TIMEOUT_SECONDS)


class Client:
    """Facade for the motorcycle rental API."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        api_uri: str | None = DEFAULT_API_URI,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        notifier: Notifier | None = None,
        storage: SnapshotStorage | None = None,
        coupon_polarity: CouponPolarity = CouponPolarity.INCREASE,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url
        self._api_uri = api_uri
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)
        self._notifier = notifier
        self._storage = storage
        self._coupon_polarity = coupon_polarity
        self._api: RestApi | None = None
        self._state: AppState | None = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        session: aiohttp.ClientSession | None = None,
        **kwargs,
    ) -> Client:
        if config.state_file and "storage" not in kwargs:
            kwargs["storage"] = JsonFileStorage(config.state_file)
        return cls(
            session,
            base_url=config.base_url,
            api_uri=config.api_uri,
            timeout=aiohttp.ClientTimeout(total=config.timeout),
            retry_count=config.retry_count,
            **kwargs,
        )

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def api(self) -> RestApi:
        if self._api is None:
            self._api = RestApi(
                self._ensure_session(),
                base_url=self._base_url,
                api_uri=self._api_uri,
                timeout=self._timeout,
                retry_count=self._retry_count,
            )
        return self._api

    @property
    def state(self) -> AppState:
        """Application state, created and loaded from storage on first access."""
        if self._state is None:
            self._state = AppState(
                self.api,
                notifier=self._notifier,
                storage=self._storage,
                coupon_polarity=self._coupon_polarity,
            )
            self._state.load()
        return self._state

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                cookie_jar=aiohttp.CookieJar(unsafe=True),
            )
        return self._session
