"""Server-side adapter between grpc.aio and plain servicer objects.

A servicer is an ordinary class whose coroutines take a request message and
return a response message. `add_servicer` wraps each method so that:
- the caller's request id (call metadata) is rebound into the request context;
- domain errors are translated to gRPC status codes;
- unknown errors are logged with the request id and returned as an opaque
  INTERNAL status.
"""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable

import grpc
from pydantic import BaseModel

from taskify.kernel.errors import TaskifyError
from taskify.kernel.request_context import (
    REQUEST_ID_METADATA_KEY,
    new_request_id,
    request_context,
)
from taskify.kernel.rpc.errors import INTERNAL_RPC_MESSAGE, rpc_status_for
from taskify.kernel.rpc.service import RpcService, encode_message

Handler = Callable[[BaseModel], Awaitable[BaseModel]]


def _request_id_from(context: grpc.aio.ServicerContext) -> str:
    for key, value in context.invocation_metadata() or ():
        if key == REQUEST_ID_METADATA_KEY and value:
            return value
    return new_request_id()


def _wrap(rpc_method: str, handler: Handler) -> Callable[[BaseModel, grpc.aio.ServicerContext], Awaitable[Any]]:
    async def _handle(request: BaseModel, context: grpc.aio.ServicerContext) -> Any:
        with request_context(_request_id_from(context), rpc_method=rpc_method) as logger:
            started = time.perf_counter()
            try:
                response = await handler(request)
            except TaskifyError as exc:
                code, details = rpc_status_for(exc)
                if code == grpc.StatusCode.INTERNAL:
                    logger.error("RPC failed", error_code=exc.code, error=str(exc))
                else:
                    logger.info("RPC rejected", status=code.name, error_code=exc.code)
            except Exception:
                logger.exception("RPC failed with unhandled exception")
                code, details = grpc.StatusCode.INTERNAL, INTERNAL_RPC_MESSAGE
            else:
                logger.info(
                    "RPC completed",
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
                return response

            await context.abort(code, details)

    return _handle


def add_servicer(server: grpc.aio.Server, service: RpcService, servicer: object) -> None:
    """Register every method of `service` on `server`, backed by `servicer`."""
    handlers = {}
    for method_name, method in service.methods.items():
        handler = getattr(servicer, method.handler)
        handlers[method_name] = grpc.unary_unary_rpc_method_handler(
            _wrap(f"{service.name}/{method_name}", handler),
            request_deserializer=method.request_model.model_validate_json,
            response_serializer=encode_message,
        )
    server.add_generic_rpc_handlers(
        (grpc.method_handlers_generic_handler(service.name, handlers),)
    )
