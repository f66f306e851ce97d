"""Application state: every store, created once and torn down explicitly."""

from __future__ import annotations

import logging

from ..api import RestApi
from ..pricing import CouponPolarity
from .auth import AuthStore
from .base import BaseStore
from .booking import BookingStore
from .cart import CartStore
from .motorcycle import MotorcycleStore
from .motorcycle_log import MotorcycleLogStore
from .notify import LoggingNotifier, Notifier
from .persistence import AUTH_STORAGE_KEY, CART_STORAGE_KEY, MemoryStorage, SnapshotStorage

_LOGGER = logging.getLogger(__name__)


class AppState:
    """Container for all stores of one application session.

    Create it at application start, call :meth:`load` to restore the
    persisted auth and cart snapshots, and :meth:`reset` on logout or
    teardown. Auth and cart snapshots are written back after every
    successful change.
    """

    def __init__(
        self,
        api: RestApi,
        *,
        notifier: Notifier | None = None,
        storage: SnapshotStorage | None = None,
        coupon_polarity: CouponPolarity = CouponPolarity.INCREASE,
    ) -> None:
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.storage: SnapshotStorage = storage if storage is not None else MemoryStorage()
        self.auth = AuthStore(api, self.notifier, on_logout=self.reset)
        self.cart = CartStore(api, self.notifier, coupon_polarity=coupon_polarity)
        self.bookings = BookingStore(api, self.notifier)
        self.motorcycles = MotorcycleStore(api, self.notifier)
        self.motorcycle_logs = MotorcycleLogStore(api, self.notifier)
        self.auth.on_change = self._save_auth
        self.cart.on_change = self._save_cart
        api.on_session_expired = self._handle_session_expired

    @property
    def stores(self) -> tuple[BaseStore, ...]:
        return (self.auth, self.cart, self.bookings, self.motorcycles, self.motorcycle_logs)

    def load(self) -> None:
        self.auth.restore(self.storage.get(AUTH_STORAGE_KEY))
        self.cart.restore(self.storage.get(CART_STORAGE_KEY))
        _LOGGER.debug("State loaded authenticated=%s", self.auth.is_authenticated)

    def save(self) -> None:
        self._save_auth()
        self._save_cart()

    def reset(self) -> None:
        for store in self.stores:
            store.reset()
        self.storage.remove(AUTH_STORAGE_KEY)
        self.storage.remove(CART_STORAGE_KEY)
        _LOGGER.debug("State reset")

    def _save_auth(self) -> None:
        self.storage.set(AUTH_STORAGE_KEY, self.auth.snapshot())

    def _save_cart(self) -> None:
        self.storage.set(CART_STORAGE_KEY, self.cart.snapshot())

    def _handle_session_expired(self) -> None:
        _LOGGER.warning("Session expired, clearing signed-in user")
        self.auth.reset()
        self.storage.remove(AUTH_STORAGE_KEY)
