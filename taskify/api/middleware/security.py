"""
HTTP middleware for the gateway.

Provides:
- Request ID tracking (correlation id bound into the request context)
- Security headers
- CORS origin selection
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from taskify.config import get_settings
from taskify.kernel.http.errors import INTERNAL_HTTP_MESSAGE, error_response
from taskify.kernel.request_context import (
    REQUEST_ID_HEADER,
    accept_request_id,
    request_context,
)

# =============================================================================
# Request ID Tracking
# =============================================================================


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Bind a request id to everything that happens while serving a request.

    The id comes from the `X-Request-ID` header, or is generated when the
    header is missing or is not printable ASCII of at most 128 characters.
    It is echoed back on the response and carried by the request-scoped
    logger (and from there into outbound RPC metadata). Exceptions that
    escape the registered handlers are logged here and turned into an opaque
    500, so even failed responses carry the header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        with request_context(request_id) as logger:
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "Unhandled error while serving request",
                    method=request.method,
                    path=request.url.path,
                )
                response = error_response(500, INTERNAL_HTTP_MESSAGE)

            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response


# =============================================================================
# Security Headers
# =============================================================================


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    Headers:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: DENY
    - Referrer-Policy: strict-origin-when-cross-origin
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


# =============================================================================
# CORS Configuration
# =============================================================================


def get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    Production: only the configured origins
    Development: also allow common local ports
    """
    settings = get_settings()

    if settings.environment == "production":
        return settings.cors_origins

    dev_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    return sorted(set(settings.cors_origins + dev_origins))
