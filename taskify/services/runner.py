"""
Service Runner

Shared process lifecycle for the gRPC services: logging, database pool,
listening port, and graceful shutdown on SIGINT/SIGTERM.
"""

import asyncio
import signal
from typing import Callable

import grpc
import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.config import Settings, get_settings
from taskify.db.client import close_db, init_db
from taskify.kernel.request_context import configure_logging

logger = structlog.get_logger()

# Seconds in-flight calls get to finish on shutdown
SHUTDOWN_GRACE_SECONDS = 5.0

ServerFactory = Callable[[async_sessionmaker[AsyncSession], Settings], grpc.aio.Server]


async def run_service(name: str, listen: Callable[[Settings], str], create_server: ServerFactory) -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    sessions = await init_db(settings)
    server = create_server(sessions, settings)
    address = listen(settings)
    server.add_insecure_port(address)
    await server.start()
    logger.info("Service started", service=name, address=address)

    # Sleep forever until signal
    stop_event = asyncio.Event()

    def _handle_signal(*_args):
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            asyncio.get_event_loop().add_signal_handler(sig, _handle_signal)
        except NotImplementedError:
            signal.signal(sig, lambda *_: stop_event.set())

    try:
        await stop_event.wait()
    finally:
        await server.stop(SHUTDOWN_GRACE_SECONDS)
        await close_db()
        logger.info("Service stopped", service=name)
