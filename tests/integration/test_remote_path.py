"""
End-to-end tests through the gateway and the in-process gRPC services.

Both services and the gateway share one SQLite file here; in production each
process owns its own pool.
"""

from __future__ import annotations

import asyncio

import grpc
import pytest
from structlog.testing import capture_logs

from taskify.api.main import create_app
from taskify.contexts.boards.rpc import BoardsClient
from taskify.gateway.dispatcher import build_dispatcher
from taskify.kernel.request_context import request_context
from taskify.kernel.rpc.errors import RpcStatusError

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def _create_user(gateway, email: str = "ada@example.com") -> dict:
    response = await gateway.post(
        "/api/users", json={"email": email, "username": "ada", "password": "secret123"}
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestUsers:
    async def test_user_lifecycle(self, gateway):
        user = await _create_user(gateway)
        assert set(user) == {"id", "email", "username"}

        response = await gateway.get(f"/api/users/{user['id']}")
        assert response.status_code == 200
        assert response.json() == user

        response = await gateway.put(
            f"/api/users/{user['id']}", json={"email": "ada@example.com", "username": "countess"}
        )
        assert response.status_code == 200
        assert response.json()["username"] == "countess"

        assert (await gateway.delete(f"/api/users/{user['id']}")).status_code == 204
        assert (await gateway.get(f"/api/users/{user['id']}")).status_code == 404

    async def test_duplicate_email_is_409(self, gateway):
        await _create_user(gateway)

        response = await gateway.post(
            "/api/users", json={"email": "ada@example.com", "username": "ada2", "password": "secret123"}
        )

        assert response.status_code == 409
        assert response.json() == {"error": "User with this email already exists"}

    async def test_invalid_user_is_400(self, gateway):
        response = await gateway.post(
            "/api/users", json={"email": "nope", "username": "ada", "password": "secret123"}
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("email:")

    async def test_empty_password_update_is_400(self, gateway):
        user = await _create_user(gateway)

        response = await gateway.put(
            f"/api/users/{user['id']}",
            json={"email": "ada@example.com", "username": "ada", "password": ""},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "password: is required"}


class TestBoards:
    async def test_deposit_and_withdraw(self, gateway):
        response = await gateway.post("/api/users/2/boards", json={"name": "Deposit"})
        assert response.status_code == 201
        assert response.json()["position"] == 1

        response = await gateway.post("/api/users/2/boards", json={"name": "Withdraw"})
        assert response.status_code == 201
        withdraw = response.json()
        assert withdraw["position"] == 2

        response = await gateway.get(f"/api/users/2/boards/{withdraw['id']}")
        assert response.status_code == 200
        assert response.json() == {
            "id": withdraw["id"],
            "user_id": 2,
            "position": 2,
            "name": "Withdraw",
            "description": "",
        }

    async def test_missing_board_is_404(self, gateway):
        response = await gateway.get("/api/users/1/boards/12345")
        assert response.status_code == 404
        assert response.json() == {"error": "Board not found"}

    async def test_other_owners_board_is_404(self, gateway):
        board = (await gateway.post("/api/users/1/boards", json={"name": "Mine"})).json()
        response = await gateway.get(f"/api/users/2/boards/{board['id']}")
        assert response.status_code == 404

    async def test_empty_name_update_is_400_and_row_unchanged(self, gateway):
        board = (await gateway.post("/api/users/3/boards", json={"name": "Plan", "description": "q3"})).json()

        response = await gateway.put(f"/api/users/3/boards/{board['id']}", json={"name": ""})
        assert response.status_code == 400
        assert response.json() == {"error": "name: is required"}

        response = await gateway.get(f"/api/users/3/boards/{board['id']}")
        assert response.json() == board

    async def test_concurrent_creates_get_distinct_positions(self, gateway):
        responses = await asyncio.gather(
            *(gateway.post("/api/users/4/boards", json={"name": f"b{i}"}) for i in range(4))
        )
        assert all(response.status_code == 201 for response in responses)
        assert sorted(response.json()["position"] for response in responses) == [1, 2, 3, 4]

    async def test_delete_keeps_sibling_positions(self, gateway):
        ids = [
            (await gateway.post("/api/users/5/boards", json={"name": name})).json()["id"]
            for name in ("a", "b", "c")
        ]

        assert (await gateway.delete(f"/api/users/5/boards/{ids[1]}")).status_code == 204
        assert (await gateway.delete(f"/api/users/5/boards/{ids[1]}")).status_code == 404

        positions = [
            (await gateway.get(f"/api/users/5/boards/{board_id}")).json()["position"]
            for board_id in (ids[0], ids[2])
        ]
        assert positions == [1, 3]


class TestCorrelation:
    async def test_request_id_reaches_service_logs(self, gateway):
        with capture_logs() as logs:
            response = await gateway.post(
                "/api/users/2/boards",
                json={"name": "Deposit"},
                headers={"X-Request-ID": "abc123"},
            )

        assert response.status_code == 201
        assert response.headers["X-Request-ID"] == "abc123"

        events = [entry["event"] for entry in logs]
        assert "CreateBoard called" in events
        assert "RPC completed" in events
        assert "Request completed" in events
        assert all(entry.get("req_id") == "abc123" for entry in logs), logs

    async def test_error_responses_keep_request_id(self, gateway):
        with capture_logs() as logs:
            response = await gateway.get(
                "/api/users/1/boards/999", headers={"X-Request-ID": "missing-1"}
            )

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "missing-1"
        assert {entry.get("req_id") for entry in logs} == {"missing-1"}


class TestRpcClient:
    async def test_unreachable_service_is_503(self, settings, make_client, sessions):
        channel = grpc.aio.insecure_channel("127.0.0.1:1")
        dispatcher = build_dispatcher(settings, sessions, channel, channel)
        client = make_client(create_app(dispatcher=dispatcher, sessions=sessions))

        response = await client.get("/api/users/1")
        await channel.close()

        assert response.status_code == 503
        assert response.json() == {"error": "Internal Server Error"}

    async def test_client_raises_rpc_status_error(self, rpc_addresses):
        async with grpc.aio.insecure_channel(rpc_addresses["boards"]) as channel:
            client = BoardsClient.connect(channel, timeout=5.0)
            with pytest.raises(RpcStatusError) as excinfo:
                await client.get_board_by_id(1, 999)

        assert excinfo.value.code == grpc.StatusCode.NOT_FOUND
        assert excinfo.value.details == "Board not found"
        assert excinfo.value.http_status == 404

    async def test_slow_service_exceeds_deadline_as_504(self, settings, make_client, sessions, stalled_users):
        servicer, address = stalled_users
        channel = grpc.aio.insecure_channel(address)
        short_deadline = settings.model_copy(update={"rpc_timeout_seconds": 0.3})
        dispatcher = build_dispatcher(short_deadline, sessions, channel, channel)
        client = make_client(create_app(dispatcher=dispatcher, sessions=sessions))

        response = await client.get("/api/users/1")
        await channel.close()

        assert servicer.started.is_set()
        assert response.status_code == 504
        assert response.json() == {"error": "Internal Server Error"}

    async def test_cancelled_request_cancels_the_remote_call(self, settings, sessions, stalled_users):
        servicer, address = stalled_users
        async with grpc.aio.insecure_channel(address) as channel:
            dispatcher = build_dispatcher(settings, sessions, channel, channel)

            async def serve():
                with request_context("cancel-1"):
                    return await dispatcher.backend("users").get(None, 1)

            inflight = asyncio.create_task(serve())
            await asyncio.wait_for(servicer.started.wait(), timeout=5)
            inflight.cancel()

            with pytest.raises(asyncio.CancelledError):
                await inflight
            await asyncio.wait_for(servicer.cancelled.wait(), timeout=5)


class TestRequestIdForwarding:
    async def test_non_ascii_request_id_is_replaced_before_forwarding(self, gateway):
        with capture_logs() as logs:
            response = await gateway.get(
                "/api/users/1/boards/5", headers={"X-Request-ID": "café".encode("latin-1")}
            )

        assert response.status_code == 404
        request_id = response.headers["X-Request-ID"]
        assert request_id != "café"
        assert "GetBoardByID called" in [entry["event"] for entry in logs]
        assert {entry.get("req_id") for entry in logs} == {request_id}

    async def test_out_of_range_board_id_is_400(self, gateway):
        response = await gateway.get(f"/api/users/1/boards/{2**70}")
        assert response.status_code == 400
