"""Application interfaces (ports): service protocols.

Define contracts for infrastructure implementations (DIP).
"""

from campus_cms.application.interfaces.services import (
    IAuditLogWriter,
    ICaptchaVerifier,
)

__all__ = [
    "IAuditLogWriter",
    "ICaptchaVerifier",
]
