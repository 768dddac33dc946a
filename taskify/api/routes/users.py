"""
User Routes.

Proxied to the users service over gRPC. Password hashes never leave that
service; responses carry id, email and username only.
"""

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from taskify.api.deps import EntityId, get_dispatcher
from taskify.gateway.dispatcher import USERS, GatewayDispatcher

router = APIRouter(prefix="/users", tags=["Users"])


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateUserRequest(BaseModel):
    email: str = ""
    username: str = ""
    password: str = ""


class UpdateUserRequest(BaseModel):
    """Replace email and username. Omit `password` to keep the current one."""

    email: str = ""
    username: str = ""
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    email: str
    username: str


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(USERS).create(None, request.model_dump())


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(USERS).get(None, user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: EntityId,
    request: UpdateUserRequest,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.backend(USERS).update(None, user_id, request.model_dump())


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: EntityId,
    dispatcher: GatewayDispatcher = Depends(get_dispatcher),
):
    await dispatcher.backend(USERS).delete(None, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
