"""Tests for domain exceptions (error_code, message, details)."""

from campus_cms.domain.exceptions import (
    AuthenticationException,
    CmsException,
    ResourceNotFoundException,
    UpstreamServiceException,
    ValidationException,
)
from campus_cms.infrastructure.exceptions import StorageRejectedFileError


def test_cms_exception_default_error_code() -> None:
    """Base CmsException uses class name as error_code when not provided."""
    exc = CmsException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "CmsException"
    assert exc.details == {}


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "Invalid format",
        "details": {"field": "email"},
    }


def test_not_found_for_range_operations_has_no_id() -> None:
    exc = ResourceNotFoundException("visitor records")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.message == "No visitor records found"


def test_not_found_with_id() -> None:
    exc = ResourceNotFoundException("news", 12)
    assert exc.message == "news not found: 12"
    assert exc.details["resource_id"] == 12


def test_upstream_reason_is_not_in_client_payload() -> None:
    exc = UpstreamServiceException("recaptcha", "connect timeout to 10.1.2.3")
    assert exc.reason == "connect timeout to 10.1.2.3"
    assert "10.1.2.3" not in str(exc.to_dict())


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.message == "Authentication failed"


def test_rejected_upload_is_a_client_error_code() -> None:
    exc = StorageRejectedFileError("virus.exe", "extension not allowed", "image")
    assert exc.error_code == "STORAGE_REJECTED_FILE"
    assert exc.details["field"] == "image"
