"""Wire messages of `taskify.users.v1.UsersService`."""

from __future__ import annotations

from pydantic import BaseModel

from taskify.kernel.rpc.service import Empty, RpcMethod, RpcService


class UserMessage(BaseModel):
    id: int
    email: str
    username: str


class CreateUserRequest(BaseModel):
    email: str = ""
    username: str = ""
    password: str = ""


class GetUserByIDRequest(BaseModel):
    id: int


class UpdateUserRequest(BaseModel):
    id: int
    email: str = ""
    username: str = ""
    password: str | None = None


class DeleteUserRequest(BaseModel):
    id: int


class UserResponse(BaseModel):
    user: UserMessage


USERS_SERVICE = RpcService(
    name="taskify.users.v1.UsersService",
    methods={
        "CreateUser": RpcMethod(CreateUserRequest, UserResponse, handler="create_user"),
        "GetUserByID": RpcMethod(GetUserByIDRequest, UserResponse, handler="get_user_by_id"),
        "UpdateUser": RpcMethod(UpdateUserRequest, UserResponse, handler="update_user"),
        "DeleteUser": RpcMethod(DeleteUserRequest, Empty, handler="delete_user"),
    },
)
