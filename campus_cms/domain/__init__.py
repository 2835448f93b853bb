"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from campus_cms.domain.enums import AuditAction, ComplaintStatus, Semester
from campus_cms.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CmsException,
    ResourceNotFoundException,
    UpstreamServiceException,
    ValidationException,
)

__all__ = [
    "AuditAction",
    "AuthenticationException",
    "AuthorizationException",
    "CmsException",
    "ComplaintStatus",
    "ResourceNotFoundException",
    "Semester",
    "UpstreamServiceException",
    "ValidationException",
]
