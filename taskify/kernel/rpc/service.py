"""Service definitions for pydantic-message gRPC services.

Messages are pydantic models carried as JSON payloads; services are registered
through grpc's generic method handlers, so no generated stubs are involved.
A single `RpcService` describes a service for both the server adapter and the
client.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel


class Empty(BaseModel):
    """Response of calls that return nothing."""


@dataclass(frozen=True)
class RpcMethod:
    request_model: type[BaseModel]
    response_model: type[BaseModel]
    # Name of the servicer coroutine that implements the method.
    handler: str


@dataclass(frozen=True)
class RpcService:
    name: str
    methods: dict[str, RpcMethod] = field(default_factory=dict)

    def path(self, method: str) -> str:
        return f"/{self.name}/{method}"


def encode_message(message: BaseModel) -> bytes:
    return message.model_dump_json().encode("utf-8")
