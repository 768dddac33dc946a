"""FastAPI dependencies shared by the route modules."""

from typing import Annotated

from fastapi import Path, Request

from taskify.gateway.dispatcher import GatewayDispatcher
from taskify.kernel.validation import MAX_ENTITY_ID

# Identifiers in URLs must be positive integers that fit a BIGINT; anything
# else is rejected with 400 before a backend is called.
EntityId = Annotated[int, Path(gt=0, le=MAX_ENTITY_ID)]


def get_dispatcher(request: Request) -> GatewayDispatcher:
    return request.app.state.dispatcher
