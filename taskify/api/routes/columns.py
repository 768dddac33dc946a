"""Column Routes (served in-process)."""

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from taskify.api.deps import EntityId, get_dispatcher
from taskify.gateway.dispatcher import COLUMNS, GatewayDispatcher

router = APIRouter(prefix="/boards/{board_id}/columns", tags=["Columns"])


class ColumnRequest(BaseModel):
    name: str = ""


class ColumnResponse(BaseModel):
    id: int
    board_id: int
    position: int
    name: str


@router.post("", response_model=ColumnResponse, status_code=status.HTTP_201_CREATED)
async def create_column(
    board_id: EntityId,
    request: ColumnRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(COLUMNS).create(board_id, request.model_dump())


@router.get("/{column_id}", response_model=ColumnResponse)
async def get_column(
    board_id: EntityId,
    column_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(COLUMNS).get(board_id, column_id)


@router.put("/{column_id}", response_model=ColumnResponse)
async def update_column(
    board_id: EntityId,
    column_id: EntityId,
    request: ColumnRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(COLUMNS).update(board_id, column_id, request.model_dump())


@router.delete("/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_column(
    board_id: EntityId,
    column_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    """Delete a column and every task in it."""
    await dispatcher.backend(COLUMNS).delete(board_id, column_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
