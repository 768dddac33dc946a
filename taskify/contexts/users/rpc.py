"""gRPC adapter and client for the users service."""

from __future__ import annotations

import grpc

from taskify.contexts.users.application import UsersUseCase
from taskify.contexts.users.domain import User
from taskify.contexts.users.messages import (
    USERS_SERVICE,
    CreateUserRequest,
    DeleteUserRequest,
    GetUserByIDRequest,
    UpdateUserRequest,
    UserMessage,
    UserResponse,
)
from taskify.kernel.request_context import get_logger
from taskify.kernel.rpc.client import RpcClient
from taskify.kernel.rpc.service import Empty


def _to_response(user: User) -> UserResponse:
    return UserResponse(user=UserMessage(id=user.id, email=user.email, username=user.username))


class UsersServicer:
    """Thin transport adapter over `UsersUseCase`."""

    def __init__(self, use_case: UsersUseCase) -> None:
        self._use_case = use_case

    async def create_user(self, request: CreateUserRequest) -> UserResponse:
        get_logger().info("CreateUser called")
        user = await self._use_case.create(request.email, request.username, request.password)
        return _to_response(user)

    async def get_user_by_id(self, request: GetUserByIDRequest) -> UserResponse:
        get_logger().info("GetUserByID called", user_id=request.id)
        return _to_response(await self._use_case.get(request.id))

    async def update_user(self, request: UpdateUserRequest) -> UserResponse:
        get_logger().info("UpdateUser called", user_id=request.id)
        user = await self._use_case.update(request.id, request.email, request.username, request.password)
        return _to_response(user)

    async def delete_user(self, request: DeleteUserRequest) -> Empty:
        get_logger().info("DeleteUser called", user_id=request.id)
        await self._use_case.delete(request.id)
        return Empty()


class UsersClient:
    """Typed client for `UsersService`; raises `RpcStatusError` on failure."""

    def __init__(self, rpc: RpcClient) -> None:
        self._rpc = rpc

    @classmethod
    def connect(cls, channel: grpc.aio.Channel, *, timeout: float) -> UsersClient:
        return cls(RpcClient(channel, USERS_SERVICE, timeout=timeout))

    async def create_user(self, email: str, username: str, password: str) -> UserMessage:
        request = CreateUserRequest(email=email, username=username, password=password)
        response = await self._rpc.call("CreateUser", request)
        return response.user

    async def get_user_by_id(self, user_id: int) -> UserMessage:
        response = await self._rpc.call("GetUserByID", GetUserByIDRequest(id=user_id))
        return response.user

    async def update_user(self, user_id: int, email: str, username: str, password: str | None) -> UserMessage:
        request = UpdateUserRequest(id=user_id, email=email, username=username, password=password)
        response = await self._rpc.call("UpdateUser", request)
        return response.user

    async def delete_user(self, user_id: int) -> None:
        await self._rpc.call("DeleteUser", DeleteUserRequest(id=user_id))
