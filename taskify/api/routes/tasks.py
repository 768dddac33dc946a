"""Task Routes (served in-process)."""

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from taskify.api.deps import EntityId, get_dispatcher
from taskify.gateway.dispatcher import TASKS, GatewayDispatcher

router = APIRouter(prefix="/columns/{column_id}/tasks", tags=["Tasks"])


class TaskRequest(BaseModel):
    title: str = ""
    description: str | None = None
    assignee_id: int | None = None


class TaskResponse(BaseModel):
    id: int
    column_id: int
    position: int
    title: str
    description: str
    assignee_id: int | None = None


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    column_id: EntityId,
    request: TaskRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    """Create a task at the end of the column."""
    return await dispatcher.backend(TASKS).create(column_id, request.model_dump())


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    column_id: EntityId,
    task_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(TASKS).get(column_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    column_id: EntityId,
    task_id: EntityId,
    request: TaskRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(TASKS).update(column_id, task_id, request.model_dump())


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    column_id: EntityId,
    task_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    await dispatcher.backend(TASKS).delete(column_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
