"""
Board Routes.

Boards are reached through their owner: `/users/{user_id}/boards/{board_id}`.
A board that exists under another owner is reported as not found. Requests
are proxied to the boards service over gRPC.
"""

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from taskify.api.deps import EntityId, get_dispatcher
from taskify.gateway.dispatcher import BOARDS, GatewayDispatcher

router = APIRouter(prefix="/users/{user_id}/boards", tags=["Boards"])


# =============================================================================
# Request/Response Models
# =============================================================================


class BoardRequest(BaseModel):
    name: str = ""
    description: str | None = None


class BoardResponse(BaseModel):
    id: int
    user_id: int
    position: int
    name: str
    description: str


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
async def create_board(
    user_id: EntityId,
    request: BoardRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    """Create a board at the end of the owner's board list."""
    return await dispatcher.backend(BOARDS).create(user_id, request.model_dump())


@router.get("/{board_id}", response_model=BoardResponse)
async def get_board(
    user_id: EntityId,
    board_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(BOARDS).get(user_id, board_id)


@router.put("/{board_id}", response_model=BoardResponse)
async def update_board(
    user_id: EntityId,
    board_id: EntityId,
    request: BoardRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    """Replace name and description; the position is kept."""
    return await dispatcher.backend(BOARDS).update(user_id, board_id, request.model_dump())


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_board(
    user_id: EntityId,
    board_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    await dispatcher.backend(BOARDS).delete(user_id, board_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
