"""Persistence adapter for tasks."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.contexts.tasks.domain import Task
from taskify.db.client import session_scope
from taskify.db.ordering import DEFAULT_MAX_ATTEMPTS, OrderedTable, PositionAllocator
from taskify.kernel.errors import NotFoundError
from taskify.kernel.request_context import get_logger

_TASK_COLUMNS = ("id", "column_id", "position", "title", "description", "assignee_id")

TASKS_TABLE = OrderedTable(
    name="tasks",
    scope_column="column_id",
    constraint="uq_tasks_column_id_position",
    value_columns=("title", "description", "assignee_id"),
    returning=_TASK_COLUMNS,
)

_COLUMN_EXISTS = text("SELECT 1 FROM columns WHERE id = :column_id")

_SELECT_TASK = text(
    """
    SELECT id, column_id, position, title, description, assignee_id
    FROM tasks
    WHERE column_id = :column_id AND id = :id
    """
)

_UPDATE_TASK = text(
    """
    UPDATE tasks
    SET title = :title, description = :description, assignee_id = :assignee_id
    WHERE column_id = :column_id AND id = :id
    RETURNING id, column_id, position, title, description, assignee_id
    """
)

_DELETE_TASK = text("DELETE FROM tasks WHERE column_id = :column_id AND id = :id")


def _task_not_found(task_id: int) -> NotFoundError:
    return NotFoundError(message="Task not found", code="task.not_found", meta={"task_id": task_id})


def _column_not_found(column_id: int) -> NotFoundError:
    return NotFoundError(message="Column not found", code="column.not_found", meta={"column_id": column_id})


class TaskRepository:
    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._sessions = sessions
        self._allocator = PositionAllocator(sessions, TASKS_TABLE, max_attempts=max_attempts)

    async def column_exists(self, column_id: int) -> bool:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_COLUMN_EXISTS, {"column_id": column_id})
            return result.first() is not None

    async def create(
        self,
        column_id: int,
        title: str,
        description: str,
        assignee_id: int | None,
    ) -> Task:
        if not await self.column_exists(column_id):
            raise _column_not_found(column_id)
        values = {"title": title, "description": description, "assignee_id": assignee_id}
        try:
            row = await self._allocator.insert(column_id, values)
        except IntegrityError as exc:
            # The column was deleted between the check and the insert.
            get_logger().info("Task insert rejected", column_id=column_id, error=str(exc.orig))
            raise _column_not_found(column_id) from exc
        task = Task(**row)
        get_logger().debug("Task created", task_id=task.id, position=task.position)
        return task

    async def get(self, column_id: int, task_id: int) -> Task:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_SELECT_TASK, {"column_id": column_id, "id": task_id})
            row = result.mappings().first()
        if row is None:
            get_logger().debug("Task not found", column_id=column_id, task_id=task_id)
            raise _task_not_found(task_id)
        return Task(**row)

    async def update(
        self,
        column_id: int,
        task_id: int,
        title: str,
        description: str,
        assignee_id: int | None,
    ) -> Task:
        params = {
            "column_id": column_id,
            "id": task_id,
            "title": title,
            "description": description,
            "assignee_id": assignee_id,
        }
        async with session_scope(self._sessions) as session:
            result = await session.execute(_UPDATE_TASK, params)
            row = result.mappings().first()
        if row is None:
            raise _task_not_found(task_id)
        return Task(**row)

    async def delete(self, column_id: int, task_id: int) -> None:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_DELETE_TASK, {"column_id": column_id, "id": task_id})
        if result.rowcount == 0:
            raise _task_not_found(task_id)
        get_logger().debug("Task deleted", task_id=task_id)
