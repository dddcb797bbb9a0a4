from portal.middleware.logging import RequestLoggingMiddleware, RecoveryMiddleware
from portal.middleware.paths import PathValidationMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "RecoveryMiddleware",
    "PathValidationMiddleware",
]
