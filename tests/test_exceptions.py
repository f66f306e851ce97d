from pymotorent.exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    NetworkError,
    NotFoundError,
    PyMotoRentError,
    ValidationError,
)


def test_error_defaults() -> None:
    exc = PyMotoRentError("base error")
    assert exc.error_type == "unknown"
    assert exc.error_code is None
    assert exc.detail == "base error"
    assert exc.user_message is None


def test_error_detail_fallback() -> None:
    exc = ApiError(detail="short detail")
    assert str(exc) == "short detail"
    assert exc.detail == "short detail"
    assert exc.error_code == "api_error"
    assert exc.status is None


def test_error_overrides() -> None:
    exc = ApiError(
        "bad request",
        status=400,
        error_code="coupon_expired",
        detail="coupon RIDE10 expired",
        user_message="Coupon has expired",
    )
    assert exc.error_type == "api"
    assert exc.status == 400
    assert exc.error_code == "coupon_expired"
    assert exc.detail == "coupon RIDE10 expired"
    assert exc.user_message == "Coupon has expired"


def test_error_types_have_codes() -> None:
    assert AuthError("nope").error_code == "auth_error"
    assert NetworkError("nope").error_code == "network_error"
    assert ValidationError("nope").error_code == "validation_error"
    assert ApiError("nope").error_code == "api_error"
    assert NotFoundError("nope").error_code == "not_found"
    assert ConfigError("nope").error_code == "config_error"


def test_all_errors_share_base() -> None:
    for error_cls in (AuthError, NetworkError, ValidationError, ApiError, NotFoundError, ConfigError):
        assert issubclass(error_cls, PyMotoRentError)
