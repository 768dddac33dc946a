"""Board use cases.

This is the narrow interface the gRPC adapter (`BoardsServicer`) calls; it
knows nothing about the transport.
"""

from __future__ import annotations

from taskify.contexts.boards.domain import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH, Board
from taskify.contexts.boards.repository import BoardRepository
from taskify.kernel.request_context import get_logger
from taskify.kernel.validation import optional_text, require_id, require_text


class BoardsUseCase:
    def __init__(self, repository: BoardRepository) -> None:
        self._repository = repository

    async def create(self, user_id: int, name: str, description: str | None = None) -> Board:
        user_id = require_id("user_id", user_id)
        name = require_text("name", name, max_length=NAME_MAX_LENGTH)
        description = optional_text("description", description, max_length=DESCRIPTION_MAX_LENGTH)

        board = await self._repository.create(user_id, name, description)
        get_logger().info("Board created", user_id=user_id, board_id=board.id, position=board.position)
        return board

    async def get(self, user_id: int, board_id: int) -> Board:
        return await self._repository.get(require_id("user_id", user_id), require_id("id", board_id))

    async def update(self, user_id: int, board_id: int, name: str, description: str | None = None) -> Board:
        user_id = require_id("user_id", user_id)
        board_id = require_id("id", board_id)
        name = require_text("name", name, max_length=NAME_MAX_LENGTH)
        description = optional_text("description", description, max_length=DESCRIPTION_MAX_LENGTH)
        return await self._repository.update(user_id, board_id, name, description)

    async def delete(self, user_id: int, board_id: int) -> None:
        await self._repository.delete(require_id("user_id", user_id), require_id("id", board_id))
        get_logger().info("Board deleted", user_id=user_id, board_id=board_id)
