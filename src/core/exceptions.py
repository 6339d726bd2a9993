"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SELLER_PROFILE_NOT_FOUND = "SELLER_PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_TOKEN = "MISSING_TOKEN"
    DUPLICATE_SELLER_PROFILE = "DUPLICATE_SELLER_PROFILE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


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


class MissingTokenError(AppException):
    """No identity token was supplied for a token exchange."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.MISSING_TOKEN,
            message="Identity token is required",
            status_code=400,
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
            status_code=404,
            details={"user_id": user_id},
        )


class SellerProfileNotFoundError(AppException):
    """Seller profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SELLER_PROFILE_NOT_FOUND,
            message="Seller profile not found",
            status_code=404,
            details={"user_id": user_id},
        )


class DuplicateSellerProfileError(AppException):
    """The user already owns a seller profile."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_SELLER_PROFILE,
            message="Seller profile already exists",
            status_code=400,
            details={"user_id": user_id},
        )
