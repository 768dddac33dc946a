"""RPC side of the error taxonomy.

Services map domain errors to gRPC status codes on the way out
(`rpc_status_for`); the gateway maps status codes to HTTP on the way in
(`http_status_for_rpc`). Domain error types never cross a process boundary.
"""

from __future__ import annotations

import grpc

from taskify.kernel.errors import (
    AlreadyExistsError,
    NotFoundError,
    TaskifyError,
    ValidationFailedError,
)

INTERNAL_RPC_MESSAGE = "internal error"

_RPC_STATUS_BY_KIND: tuple[tuple[type[TaskifyError], grpc.StatusCode], ...] = (
    (NotFoundError, grpc.StatusCode.NOT_FOUND),
    (AlreadyExistsError, grpc.StatusCode.ALREADY_EXISTS),
    (ValidationFailedError, grpc.StatusCode.INVALID_ARGUMENT),
)

_HTTP_STATUS_BY_RPC: dict[grpc.StatusCode, int] = {
    grpc.StatusCode.NOT_FOUND: 404,
    grpc.StatusCode.ALREADY_EXISTS: 409,
    grpc.StatusCode.INVALID_ARGUMENT: 400,
    grpc.StatusCode.DEADLINE_EXCEEDED: 504,
    grpc.StatusCode.UNAVAILABLE: 503,
    grpc.StatusCode.CANCELLED: 499,
}


def rpc_status_for(exc: BaseException) -> tuple[grpc.StatusCode, str]:
    """Return the status code and client-safe details for `exc`."""
    for kind, code in _RPC_STATUS_BY_KIND:
        if isinstance(exc, kind):
            return code, exc.message
    return grpc.StatusCode.INTERNAL, INTERNAL_RPC_MESSAGE


def http_status_for_rpc(code: grpc.StatusCode) -> int:
    return _HTTP_STATUS_BY_RPC.get(code, 500)


class RpcStatusError(Exception):
    """A remote call completed with a non-OK status.

    Raised by RPC clients in place of grpc's own error type so callers only
    depend on the status code and details.
    """

    def __init__(self, code: grpc.StatusCode, details: str | None = None) -> None:
        super().__init__(f"{code.name}: {details or ''}")
        self.code = code
        self.details = details or ""

    @property
    def http_status(self) -> int:
        return http_status_for_rpc(self.code)
