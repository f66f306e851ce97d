"""Cart store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..api import RestApi
from ..api.mapping import cart_to_payload, map_cart, unwrap_data
from ..exceptions import ApiError, NotFoundError
from ..models import Cart, CouponSavings
from ..pricing import CouponPolarity, coupon_savings
from ..util import format_amount
from .base import BaseStore
from .notify import Notifier

_LOGGER = logging.getLogger(__name__)


class CartStore(BaseStore):
    """The customer's cart, replaced wholesale after every server round-trip."""

    name = "cart"

    def __init__(
        self,
        api: RestApi,
        notifier: Notifier | None = None,
        *,
        coupon_polarity: CouponPolarity = CouponPolarity.INCREASE,
    ) -> None:
        super().__init__(api, notifier)
        self.coupon_polarity = coupon_polarity
        self.cart: Cart | None = None
        self.last_savings: CouponSavings | None = None

    def _reset_snapshot(self) -> None:
        self.cart = None
        self.last_savings = None

    def set_cart(self, cart: Cart | None) -> None:
        self.cart = cart
        self._changed()

    async def get_user_cart(self) -> Cart:
        async with self._operation("get_user_cart", "Failed to get cart"):
            envelope = await self._api.get_user_cart()
            self.cart = map_cart(unwrap_data(envelope))
        return self.cart

    async def add_or_update_motorcycle(self, motorcycle_id: str, data: Mapping[str, Any]) -> Cart:
        async with self._operation("add_or_update_motorcycle", "Failed to add to cart"):
            envelope = await self._api.add_or_update_motorcycle_to_cart(motorcycle_id, data)
            self.cart = map_cart(unwrap_data(envelope))
        return self.cart

    async def remove_motorcycle(self, motorcycle_id: str) -> Cart:
        async with self._operation("remove_motorcycle", "Failed to remove from cart"):
            envelope = await self._api.remove_motorcycle_from_cart(motorcycle_id)
            self.cart = map_cart(unwrap_data(envelope))
        return self.cart

    async def clear_cart(self) -> None:
        """Empty the cart; clearing an empty cart succeeds without a request."""
        if self.cart is not None and not self.cart.items and self.cart.coupon is None:
            _LOGGER.debug("Store cart clear_cart skipped, cart is already empty")
            self.error = None
            return
        async with self._operation("clear_cart", "Failed to clear cart"):
            try:
                await self._api.clear_cart()
            except NotFoundError:
                _LOGGER.debug("Store cart clear_cart found no cart on the server")
            self.cart = None
            self.last_savings = None

    async def apply_coupon(self, coupon_code: str) -> CouponSavings:
        """Apply a coupon and report the savings under ``coupon_polarity``.

        A rejected coupon leaves the held cart untouched.
        """
        async with self._operation("apply_coupon", "Failed to apply coupon"):
            envelope = await self._api.apply_coupon(coupon_code)
            cart = map_cart(unwrap_data(envelope))
            savings = coupon_savings(cart, self.coupon_polarity)
            self.cart = cart
            self.last_savings = savings
        if savings.applied:
            self._notifier.success(f"Coupon Applied. Discount: {format_amount(savings.amount)}")
        return savings

    async def remove_coupon(self) -> Cart | None:
        """Remove the applied coupon; with none applied this is a no-op."""
        if self.cart is not None and self.cart.coupon is None:
            _LOGGER.debug("Store cart remove_coupon skipped, no coupon applied")
            self.error = None
            return self.cart
        async with self._operation("remove_coupon", "Failed to remove coupon"):
            try:
                envelope = await self._api.remove_coupon_from_cart()
            except NotFoundError:
                _LOGGER.debug("Store cart remove_coupon found no cart on the server")
                return self.cart
            self.cart = map_cart(unwrap_data(envelope))
            self.last_savings = None
        return self.cart

    def snapshot(self) -> dict[str, Any]:
        return {"cart": cart_to_payload(self.cart) if self.cart is not None else None}

    def restore(self, snapshot: Any) -> None:
        if not isinstance(snapshot, dict):
            return
        raw_cart = snapshot.get("cart")
        try:
            self.cart = map_cart(raw_cart) if isinstance(raw_cart, dict) else None
        except ApiError:
            _LOGGER.warning("Stored cart snapshot is invalid, discarding it")
            self.cart = None
