from __future__ import annotations

import grpc
import pytest
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from taskify.api.middleware.security import RequestIDMiddleware
from taskify.kernel.errors import (
    AlreadyExistsError,
    ConflictError,
    NotFoundError,
    TaskifyError,
    TransientStorageError,
    ValidationFailedError,
)
from taskify.kernel.http.errors import http_status_for, register_exception_handlers
from taskify.kernel.rpc.errors import RpcStatusError

pytestmark = pytest.mark.asyncio


class _ValueBody(BaseModel):
    value: int


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    return app


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (NotFoundError(), 404),
        (AlreadyExistsError(), 409),
        (ConflictError(), 409),
        (ValidationFailedError("name", "is required"), 400),
        (TransientStorageError(), 500),
        (RuntimeError("boom"), 500),
    ],
)
async def test_http_status_for_domain_kinds(exc, expected):
    assert http_status_for(exc) == expected


async def test_domain_error_body_is_error_message(make_client):
    app = _app()

    @app.get("/missing")
    async def missing():  # pragma: no cover - exercised via request
        raise NotFoundError(message="Board not found", code="board.not_found")

    response = await make_client(app).get("/missing", headers={"X-Request-ID": "req_123"})
    assert response.status_code == 404
    assert response.json() == {"error": "Board not found"}
    assert response.headers["X-Request-ID"] == "req_123"


async def test_internal_domain_error_is_opaque(make_client):
    app = _app()

    @app.get("/transient")
    async def transient():  # pragma: no cover - exercised via request
        raise TransientStorageError(message="SELECT secret FROM boards")

    response = await make_client(app).get("/transient")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


async def test_rpc_status_error_maps_to_http(make_client):
    app = _app()

    @app.get("/conflict")
    async def conflict():  # pragma: no cover - exercised via request
        raise RpcStatusError(grpc.StatusCode.ALREADY_EXISTS, "User with this email already exists")

    @app.get("/deadline")
    async def deadline():  # pragma: no cover - exercised via request
        raise RpcStatusError(grpc.StatusCode.DEADLINE_EXCEEDED, "Deadline Exceeded")

    client = make_client(app)
    response = await client.get("/conflict")
    assert response.status_code == 409
    assert response.json() == {"error": "User with this email already exists"}

    response = await client.get("/deadline")
    assert response.status_code == 504
    assert response.json() == {"error": "Internal Server Error"}


async def test_unhandled_exception_is_opaque_500_with_request_id(make_client):
    app = _app()

    @app.get("/boom")
    async def boom():  # pragma: no cover - exercised via request
        raise RuntimeError("connection string leaked")

    response = await make_client(app).get("/boom", headers={"X-Request-ID": "req_500"})
    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert response.headers["X-Request-ID"] == "req_500"


async def test_http_exception_keeps_detail(make_client):
    app = _app()

    @app.get("/forbidden")
    async def forbidden():  # pragma: no cover - exercised via request
        raise HTTPException(status_code=403, detail="Forbidden")

    response = await make_client(app).get("/forbidden")
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


async def test_request_validation_error_is_400(make_client):
    app = _app()

    @app.post("/validate")
    async def validate(body: _ValueBody):  # pragma: no cover - exercised via request
        return {"value": body.value}

    client = make_client(app)
    response = await client.post("/validate", json={"value": "not-an-int"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Bad request: value:")

    response = await client.post(
        "/validate", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


async def test_error_codes_must_be_dot_separated():
    with pytest.raises(ValueError):
        TaskifyError(code="Not A Code", message="x")
