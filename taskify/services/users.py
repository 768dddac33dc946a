"""Users gRPC service process (`taskify-users-service`)."""

import asyncio

import grpc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.config import Settings
from taskify.contexts.users.application import UsersUseCase
from taskify.contexts.users.messages import USERS_SERVICE
from taskify.contexts.users.repository import UserRepository
from taskify.contexts.users.rpc import UsersServicer
from taskify.kernel.rpc.server import add_servicer
from taskify.services.runner import run_service


def create_server(sessions: async_sessionmaker[AsyncSession], settings: Settings) -> grpc.aio.Server:
    server = grpc.aio.server()
    add_servicer(server, USERS_SERVICE, UsersServicer(UsersUseCase(UserRepository(sessions))))
    return server


def main() -> None:
    asyncio.run(run_service("users", lambda settings: settings.users_rpc_listen, create_server))


if __name__ == "__main__":
    main()
