"""Client side of pydantic-message gRPC services."""

from __future__ import annotations

import grpc
from prometheus_client import Counter
from pydantic import BaseModel

from taskify.kernel.request_context import (
    REQUEST_ID_METADATA_KEY,
    current_request_id,
    get_logger,
)
from taskify.kernel.rpc.errors import RpcStatusError
from taskify.kernel.rpc.service import RpcService, encode_message

_rpc_client_calls_total = Counter(
    "taskify_rpc_client_calls_total",
    "Outbound RPC calls by service, method and final status",
    ["service", "method", "status"],
)


class RpcClient:
    """Unary caller for one service over a shared channel.

    The current request id is attached to every call as metadata and each
    call carries a deadline. Calls are awaited by the caller's task, so
    cancelling that task cancels the RPC.
    """

    def __init__(self, channel: grpc.aio.Channel, service: RpcService, *, timeout: float) -> None:
        self._channel = channel
        self._service = service
        self._timeout = timeout

    async def call(self, method: str, request: BaseModel) -> BaseModel:
        rpc_method = self._service.methods[method]
        stub = self._channel.unary_unary(
            self._service.path(method),
            request_serializer=encode_message,
            response_deserializer=rpc_method.response_model.model_validate_json,
        )

        metadata: tuple[tuple[str, str], ...] = ()
        request_id = current_request_id()
        if request_id:
            metadata = ((REQUEST_ID_METADATA_KEY, request_id),)

        logger = get_logger(rpc_method=f"{self._service.name}/{method}")
        logger.debug("RPC call started", timeout=self._timeout)
        try:
            response = await stub(request, metadata=metadata, timeout=self._timeout)
        except grpc.aio.AioRpcError as exc:
            code = exc.code()
            _rpc_client_calls_total.labels(self._service.name, method, code.name).inc()
            logger.warning("RPC call failed", status=code.name, details=exc.details())
            raise RpcStatusError(code, exc.details()) from exc

        _rpc_client_calls_total.labels(self._service.name, method, "OK").inc()
        return response
