"""pymotorent package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .client import Client
from .config import ClientConfig
from .exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    NetworkError,
    NotFoundError,
    PyMotoRentError,
    ValidationError,
)
from .models import (
    Booking,
    BookingDuration,
    BookingPeriod,
    Cart,
    CartItem,
    Coupon,
    CouponSavings,
    Motorcycle,
    MotorcycleLog,
    PageMetadata,
    PaymentConfirmation,
    PaymentOrder,
    Review,
    User,
)
from .pricing import CouponPolarity, compute_duration, coupon_savings, duration_from_period

try:
    __version__ = version("pymotorent")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ApiError",
    "AuthError",
    "Booking",
    "BookingDuration",
    "BookingPeriod",
    "Cart",
    "CartItem",
    "Client",
    "ClientConfig",
    "ConfigError",
    "Coupon",
    "CouponPolarity",
    "CouponSavings",
    "Motorcycle",
    "MotorcycleLog",
    "NetworkError",
    "NotFoundError",
    "PageMetadata",
    "PaymentConfirmation",
    "PaymentOrder",
    "PyMotoRentError",
    "Review",
    "User",
    "ValidationError",
    "__version__",
    "compute_duration",
    "coupon_savings",
    "duration_from_period",
]
