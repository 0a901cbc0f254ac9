"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    NOT_FOUND = "NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    PAYMENT_METHOD_NOT_FOUND = "PAYMENT_METHOD_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_HANDLE = "INVALID_HANDLE"
    INVALID_REORDER = "INVALID_REORDER"
    INVALID_USERNAME = "INVALID_USERNAME"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Upstream errors (502)
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class DomainValidationError(AppException):
    """A request violated a domain rule (empty handle, bad permutation, ...)."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class InvalidHandleError(DomainValidationError):
    """Payment method handle is empty."""

    def __init__(self) -> None:
        super().__init__(
            message="Handle must not be empty",
            error_code=ErrorCode.INVALID_HANDLE,
            details={"field": "handle"},
        )


class InvalidUsernameError(DomainValidationError):
    """Username violates the length or charset rules."""

    def __init__(self, username: str) -> None:
        super().__init__(
            message=(
                "Username must be 3-30 characters of lowercase letters, "
                "numbers, and hyphens"
            ),
            error_code=ErrorCode.INVALID_USERNAME,
            details={"username": username},
        )


class InvalidReorderError(DomainValidationError):
    """Submitted order is not a permutation of the owner's methods."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_REORDER,
            details=details,
        )


class ResourceNotFoundError(AppException):
    """Requested resource does not exist or is not visible to the caller."""

    def __init__(
        self,
        message: str = "Resource not found",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ProfileNotFoundError(ResourceNotFoundError):
    """Profile not found."""

    def __init__(self, username: str) -> None:
        super().__init__(
            message=f"Profile not found: {username}",
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            details={"username": username},
        )


class PaymentMethodNotFoundError(ResourceNotFoundError):
    """Payment method not found (or owned by someone else)."""

    def __init__(self, method_id: str) -> None:
        super().__init__(
            message=f"Payment method not found: {method_id}",
            error_code=ErrorCode.PAYMENT_METHOD_NOT_FOUND,
            details={"method_id": method_id},
        )


class UsernameTakenError(AppException):
    """Username is already claimed by another account."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message=f"Username already taken: {username}",
            status_code=409,
            details={"username": username},
        )


class TransportError(AppException):
    """The API could not be reached or answered with an unexpected status."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=ErrorCode.TRANSPORT_FAILURE,
            message=message,
            status_code=status_code,
            details=details,
        )
