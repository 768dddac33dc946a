"""Column use cases, called directly by the gateway."""

from __future__ import annotations

from taskify.contexts.columns.domain import NAME_MAX_LENGTH, Column
from taskify.contexts.columns.repository import ColumnRepository
from taskify.kernel.request_context import get_logger
from taskify.kernel.validation import require_id, require_text


class ColumnsUseCase:
    def __init__(self, repository: ColumnRepository) -> None:
        self._repository = repository

    async def create(self, board_id: int, name: str) -> Column:
        board_id = require_id("board_id", board_id)
        name = require_text("name", name, max_length=NAME_MAX_LENGTH)

        column = await self._repository.create(board_id, name)
        get_logger().info("Column created", board_id=board_id, column_id=column.id, position=column.position)
        return column

    async def get(self, board_id: int, column_id: int) -> Column:
        return await self._repository.get(require_id("board_id", board_id), require_id("id", column_id))

    async def update(self, board_id: int, column_id: int, name: str) -> Column:
        board_id = require_id("board_id", board_id)
        column_id = require_id("id", column_id)
        name = require_text("name", name, max_length=NAME_MAX_LENGTH)
        return await self._repository.update(board_id, column_id, name)

    async def delete(self, board_id: int, column_id: int) -> None:
        """Delete a column together with its tasks."""
        await self._repository.delete(require_id("board_id", board_id), require_id("id", column_id))
        get_logger().info("Column deleted", board_id=board_id, column_id=column_id)
