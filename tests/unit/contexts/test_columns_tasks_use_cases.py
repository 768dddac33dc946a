from __future__ import annotations

import pytest

from taskify.contexts.columns.application import ColumnsUseCase
from taskify.contexts.columns.repository import ColumnRepository
from taskify.contexts.tasks.application import TasksUseCase
from taskify.contexts.tasks.repository import TaskRepository
from taskify.kernel.errors import NotFoundError, ValidationFailedError

pytestmark = pytest.mark.asyncio


@pytest.fixture
def columns(sessions) -> ColumnsUseCase:
    return ColumnsUseCase(ColumnRepository(sessions))


@pytest.fixture
def tasks(sessions) -> TasksUseCase:
    return TasksUseCase(TaskRepository(sessions))


async def test_columns_are_ordered_per_board(columns):
    todo = await columns.create(1, "To do")
    doing = await columns.create(1, "Doing")
    other = await columns.create(2, "Backlog")

    assert (todo.position, doing.position, other.position) == (1, 2, 1)


async def test_column_scope_mismatch_is_not_found(columns):
    column = await columns.create(1, "To do")

    with pytest.raises(NotFoundError):
        await columns.get(2, column.id)

    renamed = await columns.update(1, column.id, "Todo")
    assert renamed.name == "Todo"
    assert renamed.position == 1


async def test_column_name_is_validated(columns):
    with pytest.raises(ValidationFailedError):
        await columns.create(1, "")
    with pytest.raises(ValidationFailedError):
        await columns.create(1, "c" * 101)


async def test_tasks_are_ordered_per_column(columns, tasks):
    column = await columns.create(1, "To do")

    first = await tasks.create(column.id, "Write tests")
    second = await tasks.create(column.id, "Ship", "after review", assignee_id=3)

    assert (first.position, second.position) == (1, 2)
    fetched = await tasks.get(column.id, second.id)
    assert fetched.description == "after review"
    assert fetched.assignee_id == 3


async def test_task_in_missing_column_is_not_found(tasks):
    with pytest.raises(NotFoundError) as excinfo:
        await tasks.create(99, "Orphan")
    assert excinfo.value.code == "column.not_found"


async def test_task_validation(columns, tasks):
    column = await columns.create(1, "To do")

    with pytest.raises(ValidationFailedError):
        await tasks.create(column.id, " ")
    with pytest.raises(ValidationFailedError):
        await tasks.create(column.id, "t" * 201)
    with pytest.raises(ValidationFailedError):
        await tasks.create(column.id, "ok", assignee_id=0)


async def test_task_update_and_delete(columns, tasks):
    column = await columns.create(1, "To do")
    task = await tasks.create(column.id, "Draft", assignee_id=1)

    updated = await tasks.update(column.id, task.id, "Final", "done", None)
    assert updated.title == "Final"
    assert updated.assignee_id is None
    assert updated.position == task.position

    await tasks.delete(column.id, task.id)
    with pytest.raises(NotFoundError):
        await tasks.get(column.id, task.id)


async def test_deleting_column_deletes_its_tasks(columns, tasks):
    column = await columns.create(1, "To do")
    task = await tasks.create(column.id, "Draft")

    await columns.delete(1, column.id)

    with pytest.raises(NotFoundError):
        await columns.get(1, column.id)
    with pytest.raises(NotFoundError):
        await tasks.get(column.id, task.id)
