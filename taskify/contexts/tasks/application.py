"""Task use cases, called directly by the gateway."""

from __future__ import annotations

from taskify.contexts.tasks.domain import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Task
from taskify.contexts.tasks.repository import TaskRepository
from taskify.kernel.request_context import get_logger
from taskify.kernel.validation import optional_text, require_id, require_text


def _optional_assignee(assignee_id: int | None) -> int | None:
    if assignee_id is None:
        return None
    return require_id("assignee_id", assignee_id)


class TasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    async def create(
        self,
        column_id: int,
        title: str,
        description: str | None = None,
        assignee_id: int | None = None,
    ) -> Task:
        column_id = require_id("column_id", column_id)
        title = require_text("title", title, max_length=TITLE_MAX_LENGTH)
        description = optional_text("description", description, max_length=DESCRIPTION_MAX_LENGTH)
        assignee_id = _optional_assignee(assignee_id)

        task = await self._repository.create(column_id, title, description, assignee_id)
        get_logger().info("Task created", column_id=column_id, task_id=task.id, position=task.position)
        return task

    async def get(self, column_id: int, task_id: int) -> Task:
        return await self._repository.get(require_id("column_id", column_id), require_id("id", task_id))

    async def update(
        self,
        column_id: int,
        task_id: int,
        title: str,
        description: str | None = None,
        assignee_id: int | None = None,
    ) -> Task:
        column_id = require_id("column_id", column_id)
        task_id = require_id("id", task_id)
        title = require_text("title", title, max_length=TITLE_MAX_LENGTH)
        description = optional_text("description", description, max_length=DESCRIPTION_MAX_LENGTH)
        return await self._repository.update(column_id, task_id, title, description, _optional_assignee(assignee_id))

    async def delete(self, column_id: int, task_id: int) -> None:
        await self._repository.delete(require_id("column_id", column_id), require_id("id", task_id))
        get_logger().info("Task deleted", column_id=column_id, task_id=task_id)
