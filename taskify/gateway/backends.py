"""
Resource backends behind the REST gateway.

Every entity group is served by one `ResourceBackend`. Remote backends proxy
to a gRPC service client; local backends call a use case in-process. Routes
only ever see the protocol, so swapping a group between the two strategies
does not touch routing code.

`scope` is the parent identifier taken from the URL (owner for boards, board
for columns, column for tasks, `None` for users). Payloads are plain dicts of
request fields; results are JSON-ready dicts.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Protocol

from taskify.contexts.boards.rpc import BoardsClient
from taskify.contexts.columns.application import ColumnsUseCase
from taskify.contexts.tasks.application import TasksUseCase
from taskify.contexts.users.rpc import UsersClient

Payload = dict[str, Any]


class ResourceBackend(Protocol):
    async def create(self, scope: int | None, payload: Payload) -> Payload: ...

    async def get(self, scope: int | None, entity_id: int) -> Payload: ...

    async def update(self, scope: int | None, entity_id: int, payload: Payload) -> Payload: ...

    async def delete(self, scope: int | None, entity_id: int) -> None: ...


# =============================================================================
# Remote proxies
# =============================================================================


class RemoteUsersBackend:
    def __init__(self, client: UsersClient) -> None:
        self._client = client

    async def create(self, scope: int | None, payload: Payload) -> Payload:
        user = await self._client.create_user(
            payload.get("email", ""), payload.get("username", ""), payload.get("password", "")
        )
        return user.model_dump()

    async def get(self, scope: int | None, entity_id: int) -> Payload:
        return (await self._client.get_user_by_id(entity_id)).model_dump()

    async def update(self, scope: int | None, entity_id: int, payload: Payload) -> Payload:
        user = await self._client.update_user(
            entity_id,
            payload.get("email", ""),
            payload.get("username", ""),
            payload.get("password"),
        )
        return user.model_dump()

    async def delete(self, scope: int | None, entity_id: int) -> None:
        await self._client.delete_user(entity_id)


class RemoteBoardsBackend:
    def __init__(self, client: BoardsClient) -> None:
        self._client = client

    async def create(self, scope: int | None, payload: Payload) -> Payload:
        board = await self._client.create_board(
            scope, payload.get("name", ""), payload.get("description") or ""
        )
        return board.model_dump()

    async def get(self, scope: int | None, entity_id: int) -> Payload:
        return (await self._client.get_board_by_id(scope, entity_id)).model_dump()

    async def update(self, scope: int | None, entity_id: int, payload: Payload) -> Payload:
        board = await self._client.update_board(
            scope, entity_id, payload.get("name", ""), payload.get("description") or ""
        )
        return board.model_dump()

    async def delete(self, scope: int | None, entity_id: int) -> None:
        await self._client.delete_board(scope, entity_id)


# =============================================================================
# Local use cases
# =============================================================================


class LocalColumnsBackend:
    def __init__(self, use_case: ColumnsUseCase) -> None:
        self._use_case = use_case

    async def create(self, scope: int | None, payload: Payload) -> Payload:
        return asdict(await self._use_case.create(scope, payload.get("name", "")))

    async def get(self, scope: int | None, entity_id: int) -> Payload:
        return asdict(await self._use_case.get(scope, entity_id))

    async def update(self, scope: int | None, entity_id: int, payload: Payload) -> Payload:
        return asdict(await self._use_case.update(scope, entity_id, payload.get("name", "")))

    async def delete(self, scope: int | None, entity_id: int) -> None:
        await self._use_case.delete(scope, entity_id)


class LocalTasksBackend:
    def __init__(self, use_case: TasksUseCase) -> None:
        self._use_case = use_case

    async def create(self, scope: int | None, payload: Payload) -> Payload:
        task = await self._use_case.create(
            scope,
            payload.get("title", ""),
            payload.get("description"),
            payload.get("assignee_id"),
        )
        return asdict(task)

    async def get(self, scope: int | None, entity_id: int) -> Payload:
        return asdict(await self._use_case.get(scope, entity_id))

    async def update(self, scope: int | None, entity_id: int, payload: Payload) -> Payload:
        task = await self._use_case.update(
            scope,
            entity_id,
            payload.get("title", ""),
            payload.get("description"),
            payload.get("assignee_id"),
        )
        return asdict(task)

    async def delete(self, scope: int | None, entity_id: int) -> None:
        await self._use_case.delete(scope, entity_id)
