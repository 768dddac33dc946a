"""Boards gRPC service process (`taskify-boards-service`)."""

import asyncio

import grpc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.config import Settings
from taskify.contexts.boards.application import BoardsUseCase
from taskify.contexts.boards.messages import BOARDS_SERVICE
from taskify.contexts.boards.repository import BoardRepository
from taskify.contexts.boards.rpc import BoardsServicer
from taskify.kernel.rpc.server import add_servicer
from taskify.services.runner import run_service


def create_server(sessions: async_sessionmaker[AsyncSession], settings: Settings) -> grpc.aio.Server:
    repository = BoardRepository(sessions, max_attempts=settings.position_allocation_max_attempts)
    server = grpc.aio.server()
    add_servicer(server, BOARDS_SERVICE, BoardsServicer(BoardsUseCase(repository)))
    return server


def main() -> None:
    asyncio.run(run_service("boards", lambda settings: settings.boards_rpc_listen, create_server))


if __name__ == "__main__":
    main()
