"""Wire messages of `taskify.boards.v1.BoardsService`."""

from __future__ import annotations

from pydantic import BaseModel

from taskify.kernel.rpc.service import Empty, RpcMethod, RpcService


class BoardMessage(BaseModel):
    id: int
    user_id: int
    position: int
    name: str
    description: str = ""


class CreateBoardRequest(BaseModel):
    user_id: int
    name: str = ""
    description: str = ""


class GetBoardByIDRequest(BaseModel):
    user_id: int
    id: int


class UpdateBoardRequest(BaseModel):
    user_id: int
    id: int
    name: str = ""
    description: str = ""


class DeleteBoardRequest(BaseModel):
    user_id: int
    id: int


class BoardResponse(BaseModel):
    board: BoardMessage


BOARDS_SERVICE = RpcService(
    name="taskify.boards.v1.BoardsService",
    methods={
        "CreateBoard": RpcMethod(CreateBoardRequest, BoardResponse, handler="create_board"),
        "GetBoardByID": RpcMethod(GetBoardByIDRequest, BoardResponse, handler="get_board_by_id"),
        "UpdateBoard": RpcMethod(UpdateBoardRequest, BoardResponse, handler="update_board"),
        "DeleteBoard": RpcMethod(DeleteBoardRequest, Empty, handler="delete_board"),
    },
)
