"""Infrastructure services: audit log writer."""

from campus_cms.infrastructure.services.audit_log_writer import AuditLogWriter

__all__ = ["AuditLogWriter"]
