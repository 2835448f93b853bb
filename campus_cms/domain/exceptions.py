"""Domain exceptions for the campus CMS.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CmsException(Exception):
    """Base exception for all campus CMS errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the structured client payload (no stack trace, no internals)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CmsException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(CmsException):
    """Raised when a read or mutation target does not exist."""

    def __init__(self, resource_type: str, resource_id: str | int | None = None) -> None:
        """Initialize with the resource type and optional identifier.

        Args:
            resource_type: Resource kind (e.g. 'news', 'complaint').
            resource_id: Missing identifier, or None for range operations.
        """
        message = (
            f"{resource_type} not found: {resource_id}"
            if resource_id is not None
            else f"No {resource_type} found"
        )
        super().__init__(
            message,
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AuthenticationException(CmsException):
    """Raised when authentication fails (e.g. invalid or missing token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CmsException):
    """Raised when the caller lacks the admin role required for the operation."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, "AUTHORIZATION_ERROR")


class UpstreamServiceException(CmsException):
    """Raised when an external dependency (object storage, CAPTCHA) fails on our side."""

    def __init__(self, service: str, reason: str) -> None:
        """Initialize with the failing service name and a log-safe reason.

        Args:
            service: Upstream name (e.g. 'recaptcha', 'object_storage').
            reason: Short reason; not shown to clients.
        """
        super().__init__(
            f"Upstream service unavailable: {service}",
            "UPSTREAM_ERROR",
            {"service": service},
        )
        self.reason = reason
