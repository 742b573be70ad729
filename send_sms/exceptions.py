"""
Exception hierarchy for the send-sms tool.

Provides structured error handling with specific exception types for
message preparation, configuration and carrier delivery failures.
"""

from __future__ import annotations

from typing import Any, Optional


class SmsError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize application error.

        Args:
            message: Human-readable error message
            status_code: HTTP-like status code, also used to derive CLI exit codes
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ValidationError(SmsError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Validation error description
            field: Field name that failed validation
            **kwargs: Additional arguments passed to parent
        """
        super().__init__(message, status_code=400, **kwargs)
        self.field = field
        if field:
            self.details["field"] = field


class EmptyMessageError(ValidationError):
    """Raised when a message has no content after trimming."""

    def __init__(self, message: str = "Message is empty", **kwargs: Any) -> None:
        kwargs.setdefault("field", "message")
        super().__init__(message, **kwargs)


class InputError(SmsError):
    """Raised when the message cannot be read from its source."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, status_code=400, **kwargs)
        if source:
            self.details["source"] = source


class InvalidBudgetError(SmsError):
    """
    Raised when chunking limits are inconsistent.

    This is a programming or configuration mistake (for example a prefix
    reserve wider than the message limit) and is never retried.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, status_code=500, **kwargs)


class ConfigurationError(SmsError):
    """Raised when application configuration is invalid or missing."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, status_code=500, **kwargs)


class CarrierAPIError(SmsError):
    """Raised when a carrier API call fails."""

    def __init__(
        self,
        message: str,
        *,
        carrier_status: Optional[int] = None,
        carrier_code: Optional[int] = None,
        status_code: int = 502,
        **kwargs: Any,
    ) -> None:
        """
        Initialize carrier API error.

        Args:
            message: Error description
            carrier_status: HTTP status returned by the carrier
            carrier_code: Carrier-specific error code (Twilio)
            status_code: Status code used for exit code mapping
            **kwargs: Additional arguments passed to parent
        """
        super().__init__(message, status_code=status_code, **kwargs)
        self.carrier_status = carrier_status
        self.carrier_code = carrier_code
        if carrier_status:
            self.details["carrier_status"] = carrier_status
        if carrier_code:
            self.details["carrier_code"] = carrier_code


class InvalidCredentialsError(CarrierAPIError):
    """Raised when the carrier rejects the user ID or API key."""

    def __init__(self, message: str = "Invalid credentials provided", **kwargs: Any) -> None:
        super().__init__(message, status_code=401, **kwargs)


class RateLimitError(CarrierAPIError):
    """Raised when the carrier reports too many requests."""

    def __init__(
        self,
        message: str = "Too many requests sent (rate limit exceeded)",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, status_code=429, **kwargs)


class AccessDeniedError(CarrierAPIError):
    """Raised when the carrier refuses the service for this account."""

    def __init__(
        self,
        message: str = "Access denied - check your FreeMobile subscription",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, status_code=403, **kwargs)


class CarrierServerError(CarrierAPIError):
    """Raised when the carrier API fails internally."""

    def __init__(self, message: str = "Carrier server error", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


# FreeMobile answers with these HTTP statuses
_STATUS_ERRORS: dict[int, type[CarrierAPIError]] = {
    400: InvalidCredentialsError,
    402: RateLimitError,
    403: AccessDeniedError,
    500: CarrierServerError,
}


def carrier_error_from_status(status: int) -> CarrierAPIError:
    """
    Map a carrier HTTP status to the matching exception instance.

    Examples:
        >>> type(carrier_error_from_status(402)).__name__
        'RateLimitError'
        >>> carrier_error_from_status(418).message
        'Unknown carrier error (HTTP 418)'
    """
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        return CarrierAPIError(
            f"Unknown carrier error (HTTP {status})",
            carrier_status=status,
        )
    return error_cls(carrier_status=status)
