"""Map API payloads onto public models, and persisted snapshots back."""

from __future__ import annotations

from typing import Any

from ..exceptions import ApiError, ValidationError
from ..models import (
    Booking,
    Cart,
    CartItem,
    Coupon,
    Motorcycle,
    MotorcycleLog,
    PageMetadata,
    PaymentOrder,
    Review,
    User,
)
from ..util import format_utc_timestamp, parse_timestamp


def unwrap_data(envelope: Any) -> Any:
    """Return the ``data`` member of a ``{success, message, data}`` envelope."""
    if not isinstance(envelope, dict):
        raise ApiError("API response was not a JSON object.")
    if "data" not in envelope:
        raise ApiError("API response did not include data.")
    return envelope["data"]


def envelope_message(envelope: Any) -> str | None:
    if isinstance(envelope, dict):
        message = envelope.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


def envelope_success(envelope: Any) -> bool:
    return isinstance(envelope, dict) and envelope.get("success") is True


def map_page(data: Any) -> tuple[list[dict[str, Any]], PageMetadata]:
    """Split a paginated ``{data: [...], metadata: [...]}`` payload.

    A bare list is accepted as a single page holding every item.
    """
    if isinstance(data, list):
        items = [item for item in data if isinstance(item, dict)]
        return items, PageMetadata(total=len(items))
    if not isinstance(data, dict):
        raise ApiError("API response included an invalid page.")
    raw_items = data.get("data")
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        raise ApiError("API response included an invalid page.")
    raw_metadata = data.get("metadata")
    if isinstance(raw_metadata, list):
        raw_metadata = raw_metadata[0] if raw_metadata else None
    return [item for item in raw_items if isinstance(item, dict)], map_metadata(raw_metadata)


def map_metadata(data: Any) -> PageMetadata:
    if not isinstance(data, dict):
        return PageMetadata()
    return PageMetadata(
        total=_parse_int(data.get("total")),
        page=_parse_int(data.get("page"), default=1),
        total_pages=_parse_int(data.get("totalPages"), default=1),
    )


def map_user(data: Any) -> User:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid user data.")
    avatar = data.get("avatar")
    avatar_url = avatar.get("url") if isinstance(avatar, dict) else None
    return User(
        id=_require_id(data, "user id"),
        email=str(data.get("email") or ""),
        username=str(data.get("username") or ""),
        fullname=str(data.get("fullname") or ""),
        role=str(data.get("role") or "CUSTOMER"),
        is_email_verified=data.get("isEmailVerified") is True,
        avatar_url=avatar_url if isinstance(avatar_url, str) else None,
    )


def map_motorcycle(data: Any) -> Motorcycle:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid motorcycle data.")
    images = data.get("images")
    if not isinstance(images, list):
        image = data.get("image")
        images = [image] if isinstance(image, dict) else []
    image_urls = tuple(
        str(image["url"]) for image in images if isinstance(image, dict) and image.get("url")
    )
    year = data.get("year")
    return Motorcycle(
        id=_require_id(data, "motorcycle id"),
        make=str(data.get("make") or ""),
        vehicle_model=str(data.get("vehicleModel") or ""),
        year=_parse_int(year) if year is not None else None,
        rent_per_day=_parse_float(data.get("rentPerDay", data.get("pricePerDay"))),
        security_deposit=_parse_float(data.get("securityDeposit")),
        category=data.get("category") if isinstance(data.get("category"), str) else None,
        description=str(data.get("description") or ""),
        is_available=data.get("isAvailable") is not False,
        available_quantity=_parse_int(data.get("availableQuantity")),
        image_urls=image_urls,
    )


def map_motorcycle_log(data: Any) -> MotorcycleLog:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid motorcycle log data.")
    return MotorcycleLog(
        id=_require_id(data, "log id"),
        motorcycle_id=_coerce_id(data.get("motorcycleId")) or "",
        service_centre_name=str(data.get("serviceCentreName") or ""),
        date_in=_parse_optional_timestamp(data.get("dateIn")),
        date_out=_parse_optional_timestamp(data.get("dateOut")),
        status=str(data.get("status") or "OK"),
        bill_amount=_parse_float(data.get("billAmount")),
    )


def map_coupon(data: Any) -> Coupon:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid coupon data.")
    return Coupon(
        id=_require_id(data, "coupon id"),
        promo_code=str(data.get("promoCode") or "").upper(),
        type=str(data.get("type") or "FLAT"),
        discount_value=_parse_float(data.get("discountValue")),
        name=str(data.get("name") or ""),
        is_active=data.get("isActive") is not False,
        minimum_cart_value=_parse_float(data.get("minimumCartValue")),
        start_date=_parse_optional_timestamp(data.get("startDate")),
        expiry_date=_parse_optional_timestamp(data.get("expiryDate")),
    )


def map_cart_item(data: Any) -> CartItem:
    if not isinstance(data, dict):
        raise ApiError("API response included an invalid cart item.")
    motorcycle_id = _coerce_id(data.get("motorcycleId"))
    if not motorcycle_id:
        raise ApiError("API response included a cart item without motorcycle id.")
    motorcycle = data.get("motorcycle")
    return CartItem(
        motorcycle_id=motorcycle_id,
        quantity=_parse_int(data.get("quantity"), default=1),
        pickup_date=_parse_optional_timestamp(data.get("pickupDate")),
        dropoff_date=_parse_optional_timestamp(data.get("dropoffDate")),
        pickup_time=str(data.get("pickupTime") or ""),
        dropoff_time=str(data.get("dropoffTime") or ""),
        pickup_location=data.get("pickupLocation"),
        dropoff_location=data.get("dropoffLocation"),
        total_days=_parse_int(data.get("totalDays")),
        motorcycle=map_motorcycle(motorcycle) if isinstance(motorcycle, dict) else None,
    )


def map_cart(data: Any) -> Cart:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid cart data.")
    raw_items = data.get("items") or []
    if not isinstance(raw_items, list):
        raise ApiError("API response included invalid cart items.")
    coupon = data.get("coupon")
    cart_total = _parse_float(data.get("cartTotal"))
    return Cart(
        id=_coerce_id(data.get("_id") or data.get("id")),
        items=tuple(map_cart_item(item) for item in raw_items),
        rent_total=_parse_float(data.get("rentTotal")),
        security_deposit_total=_parse_float(data.get("securityDepositTotal")),
        cart_total=cart_total,
        discounted_total=_parse_float(data.get("discountedTotal"), default=cart_total),
        coupon=map_coupon(coupon) if isinstance(coupon, dict) else None,
    )


def map_booking(data: Any, *, customer: Any = None) -> Booking:
    """Map a booking; ``customer`` overrides any embedded customer document."""
    if not isinstance(data, dict):
        raise ApiError("API response included invalid booking data.")
    raw_customer = customer if customer is not None else data.get("customer")
    raw_items = data.get("items")
    items = (
        tuple(map_cart_item(item) for item in raw_items if isinstance(item, dict))
        if isinstance(raw_items, list)
        else ()
    )
    return Booking(
        id=_require_id(data, "booking id"),
        customer_id=_coerce_id(data.get("customerId")),
        status=str(data.get("status") or "PENDING"),
        payment_status=data.get("paymentStatus"),
        start_date=_parse_optional_timestamp(data.get("startDate")),
        end_date=_parse_optional_timestamp(data.get("endDate")),
        discounted_total=_parse_float(data.get("discountedTotal", data.get("totalCost"))),
        paid_amount=_parse_float(data.get("paidAmount")),
        remaining_amount=_parse_float(data.get("remainingAmount")),
        customer=map_user(raw_customer) if isinstance(raw_customer, dict) else None,
        items=items,
    )


def map_review(data: Any) -> Review:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid review data.")
    return Review(
        id=_require_id(data, "review id"),
        motorcycle_id=_coerce_id(data.get("motorcycleId")),
        booking_id=_coerce_id(data.get("bookingId")),
        user_id=_coerce_id(data.get("userId")),
        rating=_parse_float(data.get("rating")),
        comment=str(data.get("comment") or ""),
    )


def map_payment_order(data: Any) -> PaymentOrder:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid payment order data.")
    return PaymentOrder(
        id=_require_id(data, "order id"),
        amount=_parse_int(data.get("amount")),
        currency=str(data.get("currency") or "INR"),
        receipt=data.get("receipt"),
        status=data.get("status"),
    )


def user_to_payload(user: User) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "_id": user.id,
        "email": user.email,
        "username": user.username,
        "fullname": user.fullname,
        "role": user.role,
        "isEmailVerified": user.is_email_verified,
    }
    if user.avatar_url:
        payload["avatar"] = {"url": user.avatar_url}
    return payload


def motorcycle_to_payload(motorcycle: Motorcycle) -> dict[str, Any]:
    return {
        "_id": motorcycle.id,
        "make": motorcycle.make,
        "vehicleModel": motorcycle.vehicle_model,
        "year": motorcycle.year,
        "rentPerDay": motorcycle.rent_per_day,
        "securityDeposit": motorcycle.security_deposit,
        "category": motorcycle.category,
        "description": motorcycle.description,
        "isAvailable": motorcycle.is_available,
        "availableQuantity": motorcycle.available_quantity,
        "images": [{"url": url} for url in motorcycle.image_urls],
    }


def coupon_to_payload(coupon: Coupon) -> dict[str, Any]:
    return {
        "_id": coupon.id,
        "promoCode": coupon.promo_code,
        "type": coupon.type,
        "discountValue": coupon.discount_value,
        "name": coupon.name,
        "isActive": coupon.is_active,
        "minimumCartValue": coupon.minimum_cart_value,
        "startDate": _format_optional_timestamp(coupon.start_date),
        "expiryDate": _format_optional_timestamp(coupon.expiry_date),
    }


def cart_to_payload(cart: Cart) -> dict[str, Any]:
    return {
        "_id": cart.id,
        "items": [
            {
                "motorcycleId": item.motorcycle_id,
                "quantity": item.quantity,
                "pickupDate": _format_optional_timestamp(item.pickup_date),
                "dropoffDate": _format_optional_timestamp(item.dropoff_date),
                "pickupTime": item.pickup_time,
                "dropoffTime": item.dropoff_time,
                "pickupLocation": item.pickup_location,
                "dropoffLocation": item.dropoff_location,
                "totalDays": item.total_days,
                "motorcycle": (
                    motorcycle_to_payload(item.motorcycle) if item.motorcycle is not None else None
                ),
            }
            for item in cart.items
        ],
        "rentTotal": cart.rent_total,
        "securityDepositTotal": cart.security_deposit_total,
        "cartTotal": cart.cart_total,
        "discountedTotal": cart.discounted_total,
        "coupon": coupon_to_payload(cart.coupon) if cart.coupon is not None else None,
    }


def _require_id(data: dict[str, Any], label: str) -> str:
    value = _coerce_id(data.get("_id") or data.get("id"))
    if not value:
        raise ApiError(f"API response missing {label}.")
    return value


def _coerce_id(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | str):
        text = str(value).strip()
        return text or None
    return None


def _parse_int(value: Any, *, default: int = 0) -> int:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value.strip()))
        except ValueError:
            return default
    return default


def _parse_float(value: Any, *, default: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _parse_optional_timestamp(value: Any):
    if value is None or value == "":
        return None
    try:
        return parse_timestamp(str(value))
    except ValidationError as exc:
        raise ApiError("API returned an invalid timestamp.") from exc


def _format_optional_timestamp(value) -> str | None:
    if value is None:
        return None
    return format_utc_timestamp(value)
