"""Booking duration and cart pricing calculators.

Everything in this module is synchronous and free of I/O. Invalid rental
windows are reported through the zero ``BookingDuration`` sentinel instead of
an exception, so form code can call the calculator on every keystroke.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from enum import Enum

from .exceptions import ValidationError
from .models import (
    BookingDuration,
    BookingPeriod,
    Cart,
    CartItem,
    Coupon,
    CouponSavings,
    CouponType,
    PaymentMode,
)
from .util import at_time_of_day, coerce_calendar_value, parse_time_of_day

_LOGGER = logging.getLogger(__name__)

_ONE_HOUR = timedelta(hours=1)
HOURS_PER_DAY = 24
PARTIAL_PAYMENT_RATIO = 0.2


class CouponPolarity(Enum):
    """Which side of the comparison counts as a coupon saving.

    ``INCREASE`` reports savings when ``cart_total < discounted_total`` and is
    the behaviour the storefront has always shipped with. ``DECREASE`` reports
    savings when the discounted total is below the cart total, which is how
    the API computes ``discounted_total``.
    """

    INCREASE = "increase"
    DECREASE = "decrease"


def _instant(value: date | datetime | str, time_of_day: str) -> datetime:
    hours, minutes = parse_time_of_day(time_of_day)
    return at_time_of_day(coerce_calendar_value(value), hours, minutes)


def compute_duration(
    pickup_date: date | datetime | str | None,
    pickup_time: str,
    dropoff_date: date | datetime | str | None,
    dropoff_time: str,
) -> BookingDuration:
    """Return the rental length between pickup and drop-off.

    Partial hours past the last full day are rounded up, so 24h01m is billed
    as one day and one hour. A drop-off at or before pickup, a missing date
    or a malformed time returns ``BookingDuration.zero()``. When only one side
    carries a UTC offset, the other side is read in that same zone.
    """
    if pickup_date is None or dropoff_date is None:
        return BookingDuration.zero()
    try:
        pickup = _instant(pickup_date, pickup_time)
        dropoff = _instant(dropoff_date, dropoff_time)
    except ValidationError:
        _LOGGER.debug("Booking period is incomplete, returning zero duration")
        return BookingDuration.zero()
    if pickup.tzinfo is None and dropoff.tzinfo is not None:
        pickup = pickup.replace(tzinfo=dropoff.tzinfo)
    elif dropoff.tzinfo is None and pickup.tzinfo is not None:
        dropoff = dropoff.replace(tzinfo=pickup.tzinfo)

    diff = dropoff - pickup
    if diff <= timedelta(0):
        return BookingDuration.zero()

    total_hours = diff / _ONE_HOUR
    days = math.floor(total_hours / HOURS_PER_DAY)
    extra_hours = math.ceil(total_hours % HOURS_PER_DAY)
    return BookingDuration(
        total_hours=total_hours,
        days=days,
        extra_hours=extra_hours,
        duration=f"{days} days {extra_hours} hours",
    )


def duration_from_period(period: BookingPeriod) -> BookingDuration:
    return compute_duration(
        period.pickup_date,
        period.pickup_time,
        period.dropoff_date,
        period.dropoff_time,
    )


def coupon_savings(
    cart: Cart,
    polarity: CouponPolarity = CouponPolarity.INCREASE,
) -> CouponSavings:
    """Compare the totals of a cart returned after applying a coupon."""
    if polarity is CouponPolarity.INCREASE:
        if cart.cart_total < cart.discounted_total:
            return CouponSavings(applied=True, amount=cart.discounted_total - cart.cart_total)
        return CouponSavings(applied=False)
    if cart.discounted_total < cart.cart_total:
        return CouponSavings(applied=True, amount=cart.cart_total - cart.discounted_total)
    return CouponSavings(applied=False)


def item_total_days(pickup_date: date | datetime, dropoff_date: date | datetime) -> int:
    """Calendar days charged for an item; pickup and drop-off days both count."""
    start = pickup_date.date() if isinstance(pickup_date, datetime) else pickup_date
    end = dropoff_date.date() if isinstance(dropoff_date, datetime) else dropoff_date
    return (end - start).days + 1


def _days_for(item: CartItem) -> int:
    if item.total_days > 0:
        return item.total_days
    if item.pickup_date is None or item.dropoff_date is None:
        return 0
    return item_total_days(item.pickup_date, item.dropoff_date)


def rent_total(items: Iterable[CartItem]) -> float:
    total = 0.0
    for item in items:
        if item.motorcycle is None:
            continue
        total += item.motorcycle.rent_per_day * item.quantity * _days_for(item)
    return total


def security_deposit_total(items: Iterable[CartItem]) -> float:
    return sum(
        (item.motorcycle.security_deposit * item.quantity
         for item in items if item.motorcycle is not None),
        0.0,
    )


def discounted_total(cart_total: float, coupon: Coupon | None) -> float:
    if coupon is None:
        return cart_total
    if coupon.type == CouponType.FLAT:
        return cart_total - coupon.discount_value
    return cart_total - cart_total * (coupon.discount_value / 100)


def price_cart(
    items: Iterable[CartItem],
    coupon: Coupon | None = None,
    *,
    cart_id: str | None = None,
) -> Cart:
    """Estimate the totals the API reports for a cart.

    A coupon whose minimum cart value is no longer met is dropped.
    """
    items = tuple(items)
    rent = rent_total(items)
    deposit = security_deposit_total(items)
    cart_total = rent + deposit
    if coupon is not None and cart_total < coupon.minimum_cart_value:
        coupon = None
    return Cart(
        id=cart_id,
        items=items,
        rent_total=rent,
        security_deposit_total=deposit,
        cart_total=cart_total,
        discounted_total=discounted_total(cart_total, coupon),
        coupon=coupon,
    )


def payment_amount(cart: Cart, mode: str) -> float:
    """Amount charged now: 20% of the rent for partial payments, else the discounted total."""
    try:
        payment_mode = PaymentMode(mode)
    except ValueError as exc:
        raise ValidationError("Payment mode must be 'p' or 'f'.") from exc
    if payment_mode is PaymentMode.PARTIAL:
        return PARTIAL_PAYMENT_RATIO * cart.rent_total
    return cart.discounted_total
