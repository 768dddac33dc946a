"""
Integration fixtures: the users and boards gRPC services run in-process on
ephemeral ports, and the gateway talks to them over real channels.
"""

import asyncio

import grpc
import pytest_asyncio

from taskify.api.main import create_app
from taskify.contexts.users.messages import USERS_SERVICE
from taskify.gateway.dispatcher import build_dispatcher
from taskify.kernel.rpc.server import add_servicer
from taskify.services import boards as boards_service
from taskify.services import users as users_service


@pytest_asyncio.fixture
async def rpc_addresses(sessions, settings):
    servers = []
    addresses = {}
    for name, module in (("users", users_service), ("boards", boards_service)):
        server = module.create_server(sessions, settings)
        port = server.add_insecure_port("127.0.0.1:0")
        await server.start()
        servers.append(server)
        addresses[name] = f"127.0.0.1:{port}"

    yield addresses

    for server in servers:
        await server.stop(None)


@pytest_asyncio.fixture
async def gateway(sessions, settings, rpc_addresses, make_client):
    users_channel = grpc.aio.insecure_channel(rpc_addresses["users"])
    boards_channel = grpc.aio.insecure_channel(rpc_addresses["boards"])
    dispatcher = build_dispatcher(settings, sessions, users_channel, boards_channel)

    yield make_client(create_app(dispatcher=dispatcher, sessions=sessions))

    await users_channel.close()
    await boards_channel.close()


class StalledUsersServicer:
    """Users service whose handlers wait until the call is cancelled."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.cancelled = asyncio.Event()

    async def get_user_by_id(self, request):
        self.started.set()
        try:
            await asyncio.sleep(60)
        except asyncio.CancelledError:
            self.cancelled.set()
            raise
        raise AssertionError("call was expected to be cancelled")

    create_user = update_user = delete_user = get_user_by_id


@pytest_asyncio.fixture
async def stalled_users():
    """A users server that never answers, and the address it listens on."""
    servicer = StalledUsersServicer()
    server = grpc.aio.server()
    add_servicer(server, USERS_SERVICE, servicer)
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()

    yield servicer, f"127.0.0.1:{port}"

    await server.stop(None)
