"""API middleware modules."""

from .security import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    get_cors_origins,
)

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "get_cors_origins",
]
