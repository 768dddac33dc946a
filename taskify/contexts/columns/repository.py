"""Persistence adapter for board columns."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.contexts.columns.domain import Column
from taskify.db.client import session_scope
from taskify.db.ordering import DEFAULT_MAX_ATTEMPTS, OrderedTable, PositionAllocator
from taskify.kernel.errors import NotFoundError
from taskify.kernel.request_context import get_logger

COLUMNS_TABLE = OrderedTable(
    name="columns",
    scope_column="board_id",
    constraint="uq_columns_board_id_position",
    value_columns=("name",),
    returning=("id", "board_id", "position", "name"),
)

_SELECT_COLUMN = text(
    """
    SELECT id, board_id, position, name
    FROM columns
    WHERE board_id = :board_id AND id = :id
    """
)

_UPDATE_COLUMN = text(
    """
    UPDATE columns
    SET name = :name
    WHERE board_id = :board_id AND id = :id
    RETURNING id, board_id, position, name
    """
)

# Tasks go with their column even where foreign keys are not enforced (SQLite).
_DELETE_COLUMN_TASKS = text(
    """
    DELETE FROM tasks
    WHERE column_id IN (SELECT id FROM columns WHERE board_id = :board_id AND id = :id)
    """
)

_DELETE_COLUMN = text("DELETE FROM columns WHERE board_id = :board_id AND id = :id")


def _column_not_found(column_id: int) -> NotFoundError:
    return NotFoundError(message="Column not found", code="column.not_found", meta={"column_id": column_id})


class ColumnRepository:
    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._sessions = sessions
        self._allocator = PositionAllocator(sessions, COLUMNS_TABLE, max_attempts=max_attempts)

    async def create(self, board_id: int, name: str) -> Column:
        row = await self._allocator.insert(board_id, {"name": name})
        column = Column(**row)
        get_logger().debug("Column created", column_id=column.id, position=column.position)
        return column

    async def get(self, board_id: int, column_id: int) -> Column:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_SELECT_COLUMN, {"board_id": board_id, "id": column_id})
            row = result.mappings().first()
        if row is None:
            get_logger().debug("Column not found", board_id=board_id, column_id=column_id)
            raise _column_not_found(column_id)
        return Column(**row)

    async def update(self, board_id: int, column_id: int, name: str) -> Column:
        async with session_scope(self._sessions) as session:
            result = await session.execute(
                _UPDATE_COLUMN, {"board_id": board_id, "id": column_id, "name": name}
            )
            row = result.mappings().first()
        if row is None:
            raise _column_not_found(column_id)
        return Column(**row)

    async def delete(self, board_id: int, column_id: int) -> None:
        params = {"board_id": board_id, "id": column_id}
        async with session_scope(self._sessions) as session:
            tasks = await session.execute(_DELETE_COLUMN_TASKS, params)
            result = await session.execute(_DELETE_COLUMN, params)
        if result.rowcount == 0:
            raise _column_not_found(column_id)
        get_logger().debug("Column deleted", column_id=column_id, tasks_deleted=tasks.rowcount)
