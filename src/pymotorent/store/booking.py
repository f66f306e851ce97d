"""Booking store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..api import RestApi
from ..api.mapping import (
    envelope_success,
    map_booking,
    map_page,
    map_payment_order,
    map_user,
    unwrap_data,
)
from ..exceptions import ApiError
from ..models import Booking, PageMetadata, PaymentConfirmation, PaymentOrder
from .base import BaseStore
from .merge import append, attach_customer, replace_by_id, upsert_by_id
from .notify import Notifier


class BookingStore(BaseStore):
    name = "booking"

    def __init__(self, api: RestApi, notifier: Notifier | None = None) -> None:
        super().__init__(api, notifier)
        self.bookings: list[Booking] = []
        self.metadata = PageMetadata()

    def _reset_snapshot(self) -> None:
        self.bookings = []
        self.metadata = PageMetadata()

    async def get_all_bookings(self, params: Mapping[str, Any] | None = None) -> list[Booking]:
        async with self._operation("get_all_bookings", "Failed to fetch bookings"):
            envelope = await self._api.get_all_bookings(params)
            raw_items, metadata = map_page(unwrap_data(envelope))
            self.bookings = [map_booking(item) for item in raw_items]
            self.metadata = metadata
        return self.bookings

    async def create_booking(self, data: Mapping[str, Any]) -> bool:
        """Create a booking; ``False`` when the API declines without an error status."""
        async with self._operation("create_booking", "Failed to create booking"):
            envelope = await self._api.create_booking(data)
            if not envelope_success(envelope):
                return False
            self.bookings = append(self.bookings, map_booking(unwrap_data(envelope)))
        return True

    async def modify_booking(self, booking_id: str, data: Mapping[str, Any]) -> Booking:
        async with self._operation("modify_booking", "Failed to modify booking"):
            envelope = await self._api.modify_booking(booking_id, data)
            booking = self._merge_response(unwrap_data(envelope), "modifiedBooking", booking_id)
        return booking

    async def cancel_booking(self, booking_id: str) -> Booking:
        async with self._operation("cancel_booking", "Failed to cancel booking"):
            envelope = await self._api.cancel_booking(booking_id)
            booking = self._merge_response(unwrap_data(envelope), "updatedBooking", booking_id)
        return booking

    async def generate_razorpay_order(
        self,
        mode: str | None,
        booking_id: str | None = None,
    ) -> PaymentOrder:
        """Create a gateway order for a new booking (``mode``) or a pending balance."""
        async with self._operation("generate_razorpay_order", "Failed to generate payment order"):
            envelope = await self._api.generate_razorpay_order(mode, booking_id)
            order = map_payment_order(unwrap_data(envelope))
        return order

    async def verify_razorpay_payment(self, confirmation: PaymentConfirmation) -> Booking | None:
        """Forward the gateway confirmation; the signature is checked by the API."""
        async with self._operation("verify_razorpay_payment", "Failed to verify payment"):
            envelope = await self._api.verify_razorpay_payment(confirmation)
            data = unwrap_data(envelope)
            booking = map_booking(data) if isinstance(data, dict) else None
            if booking is not None:
                self.bookings = upsert_by_id(self.bookings, booking)
        return booking

    def _merge_response(self, data: Any, booking_key: str, booking_id: str) -> Booking:
        if not isinstance(data, dict) or not isinstance(data.get(booking_key), dict):
            raise ApiError("API response did not include the updated booking.")
        raw_customer = data.get("customer")
        customer = map_user(raw_customer) if isinstance(raw_customer, dict) else None
        booking = attach_customer(map_booking(data[booking_key]), customer)
        self.bookings = replace_by_id(self.bookings, booking, booking_id)
        return booking
