"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    SUPPORT = "SUPPORT"


class MotorcycleStatus(StrEnum):
    OK = "OK"
    DUE = "DUE-SERVICE"
    IN_SERVICE = "IN-SERVICE"
    IN_REPAIR = "IN-REPAIR"


class BookingStatus(StrEnum):
    PENDING = "PENDING"
    RESERVED = "RESERVED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class CouponType(StrEnum):
    FLAT = "FLAT"
    PERCENTAGE = "PERCENTAGE"


class PaymentMode(StrEnum):
    PARTIAL = "p"
    FULL = "f"


@dataclass(frozen=True, slots=True)
class BookingPeriod:
    pickup_date: date | datetime | str | None
    pickup_time: str
    dropoff_date: date | datetime | str | None
    dropoff_time: str


@dataclass(frozen=True, slots=True)
class BookingDuration:
    total_hours: float
    days: int
    extra_hours: int
    duration: str

    @classmethod
    def zero(cls) -> BookingDuration:
        return cls(total_hours=0, days=0, extra_hours=0, duration="0 days 0 hours")

    @property
    def is_valid(self) -> bool:
        """False for the zero sentinel, which must not be billed."""
        return self.total_hours > 0


@dataclass(frozen=True, slots=True)
class PageMetadata:
    total: int = 0
    page: int = 1
    total_pages: int = 1


@dataclass(frozen=True, slots=True)
class User:
    id: str
    email: str
    username: str = ""
    fullname: str = ""
    role: str = UserRole.CUSTOMER
    is_email_verified: bool = False
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class Motorcycle:
    id: str
    make: str
    vehicle_model: str
    year: int | None = None
    rent_per_day: float = 0
    security_deposit: float = 0
    category: str | None = None
    description: str = ""
    is_available: bool = True
    available_quantity: int = 0
    image_urls: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MotorcycleLog:
    id: str
    motorcycle_id: str
    service_centre_name: str = ""
    date_in: datetime | None = None
    date_out: datetime | None = None
    status: str = MotorcycleStatus.OK
    bill_amount: float = 0


@dataclass(frozen=True, slots=True)
class Coupon:
    id: str
    promo_code: str
    type: str = CouponType.FLAT
    discount_value: float = 0
    name: str = ""
    is_active: bool = True
    minimum_cart_value: float = 0
    start_date: datetime | None = None
    expiry_date: datetime | None = None


@dataclass(frozen=True, slots=True)
class CartItem:
    motorcycle_id: str
    quantity: int
    pickup_date: datetime | None = None
    dropoff_date: datetime | None = None
    pickup_time: str = ""
    dropoff_time: str = ""
    pickup_location: str | None = None
    dropoff_location: str | None = None
    total_days: int = 0
    motorcycle: Motorcycle | None = None


@dataclass(frozen=True, slots=True)
class Cart:
    id: str | None
    items: tuple[CartItem, ...] = ()
    rent_total: float = 0
    security_deposit_total: float = 0
    cart_total: float = 0
    discounted_total: float = 0
    coupon: Coupon | None = None

    @property
    def applied_coupon(self) -> str | None:
        return self.coupon.promo_code if self.coupon is not None else None


@dataclass(frozen=True, slots=True)
class CouponSavings:
    applied: bool
    amount: float = 0


@dataclass(frozen=True, slots=True)
class Booking:
    id: str
    customer_id: str | None = None
    status: str = BookingStatus.PENDING
    payment_status: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    discounted_total: float = 0
    paid_amount: float = 0
    remaining_amount: float = 0
    customer: User | None = None
    items: tuple[CartItem, ...] = ()


@dataclass(frozen=True, slots=True)
class Review:
    id: str
    motorcycle_id: str | None = None
    booking_id: str | None = None
    user_id: str | None = None
    rating: float = 0
    comment: str = ""


@dataclass(frozen=True, slots=True)
class PaymentOrder:
    id: str
    amount: int
    currency: str = "INR"
    receipt: str | None = None
    status: str | None = None


@dataclass(frozen=True, slots=True)
class PaymentConfirmation:
    razorpay_payment_id: str
    razorpay_order_id: str
    razorpay_signature: str
