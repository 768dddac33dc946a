"""gRPC adapter and client for the boards service."""

from __future__ import annotations

import grpc

from taskify.contexts.boards.application import BoardsUseCase
from taskify.contexts.boards.domain import Board
from taskify.contexts.boards.messages import (
    BOARDS_SERVICE,
    BoardMessage,
    BoardResponse,
    CreateBoardRequest,
    DeleteBoardRequest,
    GetBoardByIDRequest,
    UpdateBoardRequest,
)
from taskify.kernel.request_context import get_logger
from taskify.kernel.rpc.client import RpcClient
from taskify.kernel.rpc.service import Empty


def _to_response(board: Board) -> BoardResponse:
    return BoardResponse(board=BoardMessage.model_validate(board, from_attributes=True))


class BoardsServicer:
    """Thin transport adapter over `BoardsUseCase`."""

    def __init__(self, use_case: BoardsUseCase) -> None:
        self._use_case = use_case

    async def create_board(self, request: CreateBoardRequest) -> BoardResponse:
        get_logger().info("CreateBoard called", user_id=request.user_id)
        board = await self._use_case.create(request.user_id, request.name, request.description)
        return _to_response(board)

    async def get_board_by_id(self, request: GetBoardByIDRequest) -> BoardResponse:
        get_logger().info("GetBoardByID called", user_id=request.user_id, board_id=request.id)
        return _to_response(await self._use_case.get(request.user_id, request.id))

    async def update_board(self, request: UpdateBoardRequest) -> BoardResponse:
        get_logger().info("UpdateBoard called", user_id=request.user_id, board_id=request.id)
        board = await self._use_case.update(request.user_id, request.id, request.name, request.description)
        return _to_response(board)

    async def delete_board(self, request: DeleteBoardRequest) -> Empty:
        get_logger().info("DeleteBoard called", user_id=request.user_id, board_id=request.id)
        await self._use_case.delete(request.user_id, request.id)
        return Empty()


class BoardsClient:
    """Typed client for `BoardsService`; raises `RpcStatusError` on failure."""

    def __init__(self, rpc: RpcClient) -> None:
        self._rpc = rpc

    @classmethod
    def connect(cls, channel: grpc.aio.Channel, *, timeout: float) -> BoardsClient:
        return cls(RpcClient(channel, BOARDS_SERVICE, timeout=timeout))

    async def create_board(self, user_id: int, name: str, description: str) -> BoardMessage:
        request = CreateBoardRequest(user_id=user_id, name=name, description=description)
        response = await self._rpc.call("CreateBoard", request)
        return response.board

    async def get_board_by_id(self, user_id: int, board_id: int) -> BoardMessage:
        response = await self._rpc.call("GetBoardByID", GetBoardByIDRequest(user_id=user_id, id=board_id))
        return response.board

    async def update_board(self, user_id: int, board_id: int, name: str, description: str) -> BoardMessage:
        request = UpdateBoardRequest(user_id=user_id, id=board_id, name=name, description=description)
        response = await self._rpc.call("UpdateBoard", request)
        return response.board

    async def delete_board(self, user_id: int, board_id: int) -> None:
        await self._rpc.call("DeleteBoard", DeleteBoardRequest(user_id=user_id, id=board_id))
