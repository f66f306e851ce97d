"""REST endpoints of the motorcycle rental API.

Every coroutine returns the decoded JSON envelope unchanged; mapping onto
models is left to the caller so that stores can apply their own merge rules.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import ValidationError
from ..models import PaymentConfirmation, PaymentMode
from .base import BaseApi, FormField
from .const import (
    ASSIGN_ROLE_ENDPOINT,
    AVATAR_ENDPOINT,
    BOOKING_ANALYTICS_ENDPOINT,
    BOOKING_ENDPOINT,
    BOOKINGS_ENDPOINT,
    CART_APPLY_COUPON_ENDPOINT,
    CART_CLEAR_ENDPOINT,
    CART_ENDPOINT,
    CART_ITEM_ENDPOINT,
    CART_REMOVE_COUPON_ENDPOINT,
    CHANGE_PASSWORD_ENDPOINT,
    COUPON_ENDPOINT,
    COUPON_STATUS_ENDPOINT,
    COUPONS_ENDPOINT,
    DOCUMENTS_ENDPOINT,
    FORGOT_PASSWORD_ENDPOINT,
    LOGIN_ENDPOINT,
    LOGOUT_ENDPOINT,
    MOTORCYCLE_ENDPOINT,
    MOTORCYCLE_LOG_ENDPOINT,
    MOTORCYCLE_LOGS_BY_MOTORCYCLE_ENDPOINT,
    MOTORCYCLE_LOGS_ENDPOINT,
    MOTORCYCLES_ENDPOINT,
    PAYPAL_ORDER_ENDPOINT,
    PAYPAL_VERIFY_ENDPOINT,
    RAZORPAY_ORDER_ENDPOINT,
    RAZORPAY_VERIFY_ENDPOINT,
    REFRESH_TOKEN_ENDPOINT,
    REGISTER_ENDPOINT,
    RESEND_VERIFICATION_ENDPOINT,
    RESET_PASSWORD_ENDPOINT,
    REVIEW_ENDPOINT,
    REVIEWS_BY_MOTORCYCLE_ENDPOINT,
    USER_ENDPOINT,
    USERS_ENDPOINT,
    VERIFY_EMAIL_ENDPOINT,
)

Payload = Mapping[str, Any]


class RestApi(BaseApi):
    """One coroutine per REST endpoint."""

    # Users

    async def register(self, data: Payload) -> Any:
        return await self._request_json("POST", REGISTER_ENDPOINT, json=dict(data))

    async def login(self, data: Payload) -> Any:
        return await self._request_json("POST", LOGIN_ENDPOINT, json=dict(data))

    async def logout(self) -> Any:
        return await self._request_json("POST", LOGOUT_ENDPOINT, allow_refresh=False)

    async def get_current_user(self) -> Any:
        return await self._request_json("GET", USERS_ENDPOINT)

    async def refresh_access_token(self) -> Any:
        return await self._request_json("POST", REFRESH_TOKEN_ENDPOINT, allow_refresh=False)

    async def verify_email(self, token: str) -> Any:
        token_value = self._require_id(token, "token")
        return await self._request_json("GET", VERIFY_EMAIL_ENDPOINT.format(token=token_value))

    async def resend_email_verification(self) -> Any:
        return await self._request_json("POST", RESEND_VERIFICATION_ENDPOINT)

    async def forgot_password_request(self, data: Payload) -> Any:
        return await self._request_json("POST", FORGOT_PASSWORD_ENDPOINT, json=dict(data))

    async def reset_forgotten_password(self, token: str, data: Payload) -> Any:
        token_value = self._require_id(token, "token")
        return await self._request_json(
            "POST",
            RESET_PASSWORD_ENDPOINT.format(token=token_value),
            json=dict(data),
        )

    async def change_current_password(self, data: Payload) -> Any:
        return await self._request_json("POST", CHANGE_PASSWORD_ENDPOINT, json=dict(data))

    async def change_avatar(
        self,
        content: bytes,
        filename: str,
        *,
        content_type: str = "application/octet-stream",
        old_avatar_public_id: str | None = None,
    ) -> Any:
        form: list[FormField] = [("avatar", content, filename, content_type)]
        if old_avatar_public_id:
            form.append(("old_avatar_public_id", old_avatar_public_id, None, None))
        return await self._request_json("PATCH", AVATAR_ENDPOINT, form=form)

    async def upload_document(
        self,
        content: bytes,
        filename: str,
        *,
        document_type: str,
        name: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> Any:
        form: list[FormField] = [
            ("document", content, filename, content_type),
            ("type", document_type, None, None),
        ]
        if name:
            form.append(("name", name, None, None))
        return await self._request_json("POST", DOCUMENTS_ENDPOINT, form=form)

    async def delete_user_account(self, user_id: str) -> Any:
        user_id_value = self._require_id(user_id, "user_id")
        return await self._request_json("DELETE", USER_ENDPOINT.format(user_id=user_id_value))

    async def assign_role(self, user_id: str, data: Payload) -> Any:
        user_id_value = self._require_id(user_id, "user_id")
        return await self._request_json(
            "POST",
            ASSIGN_ROLE_ENDPOINT.format(user_id=user_id_value),
            json=dict(data),
        )

    # Motorcycles

    async def get_all_motorcycles(self, params: Payload | None = None) -> Any:
        return await self._request_json("GET", MOTORCYCLES_ENDPOINT, params=params)

    async def add_motorcycle(self, data: Payload) -> Any:
        return await self._request_json("POST", MOTORCYCLES_ENDPOINT, json=dict(data))

    async def get_motorcycle_by_id(self, motorcycle_id: str) -> Any:
        return await self._request_json("GET", self._motorcycle_path(motorcycle_id))

    async def update_motorcycle_details(self, motorcycle_id: str, data: Payload) -> Any:
        return await self._request_json(
            "PUT",
            self._motorcycle_path(motorcycle_id),
            json=dict(data),
        )

    async def update_motorcycle_maintenance_logs(self, motorcycle_id: str, data: Payload) -> Any:
        return await self._request_json(
            "PATCH",
            self._motorcycle_path(motorcycle_id),
            json=dict(data),
        )

    async def delete_motorcycle(self, motorcycle_id: str) -> Any:
        return await self._request_json("DELETE", self._motorcycle_path(motorcycle_id))

    # Motorcycle logs

    async def get_all_motorcycle_logs(self, params: Payload | None = None) -> Any:
        return await self._request_json("GET", MOTORCYCLE_LOGS_ENDPOINT, params=params)

    async def get_motorcycle_logs(self, motorcycle_id: str, params: Payload | None = None) -> Any:
        motorcycle_id_value = self._require_id(motorcycle_id, "motorcycle_id")
        return await self._request_json(
            "GET",
            MOTORCYCLE_LOGS_BY_MOTORCYCLE_ENDPOINT.format(motorcycle_id=motorcycle_id_value),
            params=params,
        )

    async def create_motorcycle_log(self, motorcycle_id: str, data: Payload) -> Any:
        payload = dict(data)
        payload["motorcycleId"] = self._require_id(motorcycle_id, "motorcycle_id")
        return await self._request_json("POST", MOTORCYCLE_LOGS_ENDPOINT, json=payload)

    async def update_motorcycle_log(self, log_id: str, data: Payload) -> Any:
        log_id_value = self._require_id(log_id, "log_id")
        return await self._request_json(
            "PUT",
            MOTORCYCLE_LOG_ENDPOINT.format(log_id=log_id_value),
            json=dict(data),
        )

    async def delete_motorcycle_log(self, log_id: str) -> Any:
        log_id_value = self._require_id(log_id, "log_id")
        return await self._request_json("DELETE", MOTORCYCLE_LOG_ENDPOINT.format(log_id=log_id_value))

    # Bookings and payments

    async def get_all_bookings(self, params: Payload | None = None) -> Any:
        return await self._request_json("GET", BOOKINGS_ENDPOINT, params=params)

    async def create_booking(self, data: Payload) -> Any:
        return await self._request_json("POST", BOOKINGS_ENDPOINT, json=dict(data))

    async def modify_booking(self, booking_id: str, data: Payload) -> Any:
        return await self._request_json("PUT", self._booking_path(booking_id), json=dict(data))

    async def cancel_booking(self, booking_id: str) -> Any:
        return await self._request_json("DELETE", self._booking_path(booking_id))

    async def generate_razorpay_order(self, mode: str | None, booking_id: str | None = None) -> Any:
        payload: dict[str, Any] = {}
        if mode is not None:
            try:
                payload["mode"] = PaymentMode(mode).value
            except ValueError as exc:
                raise ValidationError("Payment mode must be 'p' or 'f'.") from exc
        if booking_id is not None:
            payload["bookingId"] = self._require_id(booking_id, "booking_id")
        if not payload:
            raise ValidationError("Payment mode is required for new bookings.")
        return await self._request_json("POST", RAZORPAY_ORDER_ENDPOINT, json=payload)

    async def verify_razorpay_payment(self, confirmation: PaymentConfirmation) -> Any:
        payload = {
            "razorpay_payment_id": confirmation.razorpay_payment_id,
            "razorpay_order_id": confirmation.razorpay_order_id,
            "razorpay_signature": confirmation.razorpay_signature,
        }
        return await self._request_json("POST", RAZORPAY_VERIFY_ENDPOINT, json=payload)

    async def generate_paypal_order(self) -> Any:
        """Create a PayPal order for the current cart."""
        return await self._request_json("POST", PAYPAL_ORDER_ENDPOINT)

    async def verify_paypal_payment(self, order_id: str, amount: float) -> Any:
        payload = {"orderId": self._require_id(order_id, "order_id"), "amount": amount}
        return await self._request_json("POST", PAYPAL_VERIFY_ENDPOINT, json=payload)

    async def get_booking_analytics(self, params: Payload | None = None) -> Any:
        return await self._request_json("GET", BOOKING_ANALYTICS_ENDPOINT, params=params)

    # Reviews

    async def get_reviews(self, motorcycle_id: str) -> Any:
        motorcycle_id_value = self._require_id(motorcycle_id, "motorcycle_id")
        return await self._request_json(
            "GET",
            REVIEWS_BY_MOTORCYCLE_ENDPOINT.format(motorcycle_id=motorcycle_id_value),
        )

    async def add_review(self, motorcycle_id: str, data: Payload) -> Any:
        """Review a rented motorcycle; the route is keyed by motorcycle id."""
        motorcycle_id_value = self._require_id(motorcycle_id, "motorcycle_id")
        return await self._request_json(
            "POST",
            REVIEWS_BY_MOTORCYCLE_ENDPOINT.format(motorcycle_id=motorcycle_id_value),
            json=dict(data),
        )

    async def update_review(self, review_id: str, data: Payload) -> Any:
        review_id_value = self._require_id(review_id, "review_id")
        return await self._request_json(
            "PUT",
            REVIEW_ENDPOINT.format(review_id=review_id_value),
            json=dict(data),
        )

    async def delete_review(self, review_id: str) -> Any:
        review_id_value = self._require_id(review_id, "review_id")
        return await self._request_json("DELETE", REVIEW_ENDPOINT.format(review_id=review_id_value))

    # Coupons

    async def get_all_coupons(self, params: Payload | None = None) -> Any:
        return await self._request_json("GET", COUPONS_ENDPOINT, params=params)

    async def get_coupon_by_id(self, coupon_id: str) -> Any:
        return await self._request_json("GET", self._coupon_path(coupon_id))

    async def create_coupon(self, data: Payload) -> Any:
        return await self._request_json("POST", COUPONS_ENDPOINT, json=dict(data))

    async def update_coupon(self, coupon_id: str, data: Payload) -> Any:
        return await self._request_json("PATCH", self._coupon_path(coupon_id), json=dict(data))

    async def update_coupon_status(self, coupon_id: str, is_active: bool) -> Any:
        coupon_id_value = self._require_id(coupon_id, "coupon_id")
        return await self._request_json(
            "PATCH",
            COUPON_STATUS_ENDPOINT.format(coupon_id=coupon_id_value),
            json={"isActive": bool(is_active)},
        )

    async def delete_coupon(self, coupon_id: str) -> Any:
        return await self._request_json("DELETE", self._coupon_path(coupon_id))

    # Cart

    async def get_user_cart(self) -> Any:
        return await self._request_json("GET", CART_ENDPOINT)

    async def add_or_update_motorcycle_to_cart(self, motorcycle_id: str, data: Payload) -> Any:
        return await self._request_json("POST", self._cart_item_path(motorcycle_id), json=dict(data))

    async def remove_motorcycle_from_cart(self, motorcycle_id: str) -> Any:
        return await self._request_json("DELETE", self._cart_item_path(motorcycle_id))

    async def clear_cart(self) -> Any:
        return await self._request_json("DELETE", CART_CLEAR_ENDPOINT)

    async def apply_coupon(self, coupon_code: str) -> Any:
        if not isinstance(coupon_code, str) or not coupon_code.strip():
            raise ValidationError("coupon_code is required.")
        return await self._request_json(
            "POST",
            CART_APPLY_COUPON_ENDPOINT,
            json={"couponCode": coupon_code.strip().upper()},
        )

    async def remove_coupon_from_cart(self) -> Any:
        return await self._request_json("POST", CART_REMOVE_COUPON_ENDPOINT)

    def _motorcycle_path(self, motorcycle_id: str) -> str:
        value = self._require_id(motorcycle_id, "motorcycle_id")
        return MOTORCYCLE_ENDPOINT.format(motorcycle_id=value)

    def _booking_path(self, booking_id: str) -> str:
        return BOOKING_ENDPOINT.format(booking_id=self._require_id(booking_id, "booking_id"))

    def _coupon_path(self, coupon_id: str) -> str:
        return COUPON_ENDPOINT.format(coupon_id=self._require_id(coupon_id, "coupon_id"))

    def _cart_item_path(self, motorcycle_id: str) -> str:
        value = self._require_id(motorcycle_id, "motorcycle_id")
        return CART_ITEM_ENDPOINT.format(motorcycle_id=value)

    def _require_id(self, value: str, label: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{label} is required.")
        return value.strip()
