"""Persistence adapter for boards (owned by the boards service)."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.contexts.boards.domain import Board
from taskify.db.client import session_scope
from taskify.db.ordering import DEFAULT_MAX_ATTEMPTS, OrderedTable, PositionAllocator
from taskify.kernel.errors import NotFoundError
from taskify.kernel.request_context import get_logger

_BOARD_COLUMNS = ("id", "user_id", "position", "name", "description")

BOARDS_TABLE = OrderedTable(
    name="boards",
    scope_column="user_id",
    constraint="uq_boards_user_id_position",
    value_columns=("name", "description"),
    returning=_BOARD_COLUMNS,
)

_SELECT_BOARD = text(
    """
    SELECT id, user_id, position, name, description
    FROM boards
    WHERE user_id = :user_id AND id = :id
    """
)

_UPDATE_BOARD = text(
    """
    UPDATE boards
    SET name = :name, description = :description
    WHERE user_id = :user_id AND id = :id
    RETURNING id, user_id, position, name, description
    """
)

_DELETE_BOARD = text("DELETE FROM boards WHERE user_id = :user_id AND id = :id")


def _board_not_found(board_id: int) -> NotFoundError:
    return NotFoundError(message="Board not found", code="board.not_found", meta={"board_id": board_id})


class BoardRepository:
    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._sessions = sessions
        self._allocator = PositionAllocator(sessions, BOARDS_TABLE, max_attempts=max_attempts)

    async def create(self, user_id: int, name: str, description: str) -> Board:
        row = await self._allocator.insert(user_id, {"name": name, "description": description})
        board = Board(**row)
        get_logger().debug("Board created", board_id=board.id, position=board.position)
        return board

    async def get(self, user_id: int, board_id: int) -> Board:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_SELECT_BOARD, {"user_id": user_id, "id": board_id})
            row = result.mappings().first()
        if row is None:
            get_logger().debug("Board not found", user_id=user_id, board_id=board_id)
            raise _board_not_found(board_id)
        return Board(**row)

    async def update(self, user_id: int, board_id: int, name: str, description: str) -> Board:
        async with session_scope(self._sessions) as session:
            result = await session.execute(
                _UPDATE_BOARD,
                {"user_id": user_id, "id": board_id, "name": name, "description": description},
            )
            row = result.mappings().first()
        if row is None:
            raise _board_not_found(board_id)
        get_logger().debug("Board updated", board_id=board_id)
        return Board(**row)

    async def delete(self, user_id: int, board_id: int) -> None:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_DELETE_BOARD, {"user_id": user_id, "id": board_id})
        if result.rowcount == 0:
            raise _board_not_found(board_id)
        get_logger().debug("Board deleted", board_id=board_id)
