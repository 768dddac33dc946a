"""Entity group -> backend routing table for the REST gateway."""

from __future__ import annotations

from typing import Mapping

import grpc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.config import Settings
from taskify.contexts.boards.rpc import BoardsClient
from taskify.contexts.columns.application import ColumnsUseCase
from taskify.contexts.columns.repository import ColumnRepository
from taskify.contexts.tasks.application import TasksUseCase
from taskify.contexts.tasks.repository import TaskRepository
from taskify.contexts.users.rpc import UsersClient
from taskify.gateway.backends import (
    LocalColumnsBackend,
    LocalTasksBackend,
    RemoteBoardsBackend,
    RemoteUsersBackend,
    ResourceBackend,
)

USERS = "users"
BOARDS = "boards"
COLUMNS = "columns"
TASKS = "tasks"

ENTITY_GROUPS = (USERS, BOARDS, COLUMNS, TASKS)


class GatewayDispatcher:
    """Resolves the backend serving an entity group.

    The table is fixed when the application starts.
    """

    def __init__(self, backends: Mapping[str, ResourceBackend]) -> None:
        missing = [group for group in ENTITY_GROUPS if group not in backends]
        if missing:
            raise ValueError(f"No backend configured for: {', '.join(missing)}")
        self._backends = dict(backends)

    def backend(self, group: str) -> ResourceBackend:
        return self._backends[group]


def build_dispatcher(
    settings: Settings,
    sessions: async_sessionmaker[AsyncSession],
    users_channel: grpc.aio.Channel,
    boards_channel: grpc.aio.Channel,
) -> GatewayDispatcher:
    """Wire users/boards to their services and columns/tasks to local storage."""
    timeout = settings.rpc_timeout_seconds
    max_attempts = settings.position_allocation_max_attempts
    return GatewayDispatcher(
        {
            USERS: RemoteUsersBackend(UsersClient.connect(users_channel, timeout=timeout)),
            BOARDS: RemoteBoardsBackend(BoardsClient.connect(boards_channel, timeout=timeout)),
            COLUMNS: LocalColumnsBackend(
                ColumnsUseCase(ColumnRepository(sessions, max_attempts=max_attempts))
            ),
            TASKS: LocalTasksBackend(
                TasksUseCase(TaskRepository(sessions, max_attempts=max_attempts))
            ),
        }
    )
