"""Per-request correlation context.

Every request (HTTP at the gateway, RPC at a service) runs inside
`request_context()`, which binds a structlog logger carrying `req_id` into a
ContextVar. Code below the transport layer calls `get_logger()` instead of
holding a module-level logger, so every line emitted while serving one
request shares the identifier.

ContextVars do not cross the network: outbound RPC calls attach the id as
call metadata (`REQUEST_ID_METADATA_KEY`) and the receiving service rebinds it.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator
from uuid import uuid4

import structlog

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_METADATA_KEY = "x-request-id"

# Ids are forwarded as gRPC metadata, which only carries printable ASCII.
_REQUEST_ID_PATTERN = re.compile(r"[!-~]{1,128}")

_request_id: ContextVar[str | None] = ContextVar("taskify_request_id", default=None)
_request_logger: ContextVar[Any] = ContextVar("taskify_request_logger", default=None)

# Map log level string to logging constant
_LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def configure_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog for the current process."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _LOG_LEVEL_MAP.get(level.lower(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def new_request_id() -> str:
    return str(uuid4())


def accept_request_id(value: str | None) -> str:
    """Return a client-supplied id if it can be forwarded unchanged, else a new one."""
    if value and _REQUEST_ID_PATTERN.fullmatch(value):
        return value
    return new_request_id()


@contextmanager
def request_context(request_id: str, **fields: Any) -> Iterator[Any]:
    """Bind `request_id` and a logger carrying it for the duration of the block."""
    logger = structlog.get_logger().bind(req_id=request_id, **fields)
    id_token = _request_id.set(request_id)
    logger_token = _request_logger.set(logger)
    try:
        yield logger
    finally:
        _request_logger.reset(logger_token)
        _request_id.reset(id_token)


def current_request_id() -> str | None:
    return _request_id.get()


def get_logger(**fields: Any) -> Any:
    """Return the request-scoped logger, or an unbound one outside a request."""
    logger = _request_logger.get()
    if logger is None:
        logger = structlog.get_logger()
    return logger.bind(**fields) if fields else logger
