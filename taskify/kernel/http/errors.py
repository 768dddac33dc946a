from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from taskify.kernel.errors import (
    AlreadyExistsError,
    NotFoundError,
    TaskifyError,
    ValidationFailedError,
)
from taskify.kernel.request_context import get_logger
from taskify.kernel.rpc.errors import RpcStatusError

INTERNAL_HTTP_MESSAGE = "Internal Server Error"

_HTTP_STATUS_BY_KIND: tuple[tuple[type[TaskifyError], int], ...] = (
    (NotFoundError, 404),
    (AlreadyExistsError, 409),
    (ValidationFailedError, 400),
)


def http_status_for(exc: BaseException) -> int:
    """Map a domain error kind to its HTTP status (500 for anything unknown)."""
    for kind, status_code in _HTTP_STATUS_BY_KIND:
        if isinstance(exc, kind):
            return status_code
    return 500


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the gateway's exception handlers.

    All error bodies have the shape `{"error": <message>}`. 5xx bodies are
    opaque; the detail is only logged (with the request id).
    """

    @app.exception_handler(TaskifyError)
    async def _domain_error_handler(request: Request, exc: TaskifyError) -> Response:
        status_code = http_status_for(exc)
        if status_code >= 500:
            get_logger().error("Request failed", error_code=exc.code, error=str(exc))
            return error_response(status_code, INTERNAL_HTTP_MESSAGE)
        return error_response(status_code, exc.message)

    @app.exception_handler(RpcStatusError)
    async def _rpc_error_handler(request: Request, exc: RpcStatusError) -> Response:
        status_code = exc.http_status
        if status_code >= 500:
            get_logger().error("Remote call failed", status=exc.code.name, details=exc.details)
            return error_response(status_code, INTERNAL_HTTP_MESSAGE)
        return error_response(status_code, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        headers = dict(exc.headers or {})
        return error_response(int(exc.status_code), str(exc.detail), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Bad request: {location or 'body'}: {first.get('msg', 'invalid value')}"
        else:
            message = "Bad request"
        return error_response(400, message)
