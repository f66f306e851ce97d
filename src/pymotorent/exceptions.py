"""Library exceptions."""

from __future__ import annotations


class PyMotoRentError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_error_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message if message is not None else detail
        super().__init__(text or "")
        self.error_code = error_code if error_code is not None else self.default_error_code
        self.detail = detail if detail is not None else text
        self.user_message = user_message


class AuthError(PyMotoRentError):
    """Raised when authentication fails or a session expired."""

    error_type = "auth"
    default_error_code = "auth_error"


class NetworkError(PyMotoRentError):
    """Raised when network communication fails."""

    error_type = "network"
    default_error_code = "network_error"


class ValidationError(PyMotoRentError):
    """Raised when inputs fail validation."""

    error_type = "validation"
    default_error_code = "validation_error"


class NotFoundError(PyMotoRentError):
    """Raised when the API reports a missing resource."""

    error_type = "not_found"
    default_error_code = "not_found"


class ApiError(PyMotoRentError):
    """Raised when the API returns a business error or an unusable response."""

    error_type = "api"
    default_error_code = "api_error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            detail=detail,
            user_message=user_message,
        )
        self.status = status


class ConfigError(PyMotoRentError):
    """Raised when the client is misconfigured."""

    error_type = "config"
    default_error_code = "config_error"
