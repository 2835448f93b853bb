"""HTTP middleware: request size limit, request ID, security headers.

Applied in main app; order matters (last added = outermost).
All are raw ASGI callables (no BaseHTTPMiddleware) so streamed CSV
exports pass through untouched.
"""

from campus_cms.middleware.request_id import RequestIDMiddleware
from campus_cms.middleware.request_size_limit import RequestSizeLimitMiddleware
from campus_cms.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
]
