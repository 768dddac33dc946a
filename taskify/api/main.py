"""
Taskify Gateway - FastAPI Application

Single REST surface for the Taskify backend:
- users and boards are proxied to their gRPC services
- columns and tasks are served in-process from the gateway's database

Run with: uvicorn taskify.api.main:app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import grpc
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify import __version__
from taskify.api.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    get_cors_origins,
)
from taskify.api.routes import boards, columns, health, tasks, users
from taskify.config import get_settings
from taskify.db.client import close_db, init_db
from taskify.gateway.dispatcher import GatewayDispatcher, build_dispatcher
from taskify.kernel.http.errors import register_exception_handlers
from taskify.kernel.request_context import REQUEST_ID_HEADER, configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    if getattr(app.state, "dispatcher", None) is not None:
        # Wired by the caller (tests, embedding).
        yield
        return

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    logger.info(
        "Starting Taskify gateway",
        version=__version__,
        users_rpc_address=settings.users_rpc_address,
        boards_rpc_address=settings.boards_rpc_address,
    )

    sessions = await init_db(settings)
    users_channel = grpc.aio.insecure_channel(settings.users_rpc_address)
    boards_channel = grpc.aio.insecure_channel(settings.boards_rpc_address)

    app.state.sessions = sessions
    app.state.dispatcher = build_dispatcher(settings, sessions, users_channel, boards_channel)
    logger.info("Gateway backends wired")

    try:
        yield
    finally:
        logger.info("Shutting down Taskify gateway")
        await users_channel.close()
        await boards_channel.close()
        await close_db()
        app.state.dispatcher = None


def create_app(
    dispatcher: GatewayDispatcher | None = None,
    sessions: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    """Build the gateway app; backends are wired on startup unless given."""
    app = FastAPI(
        title="Taskify API",
        description="Boards, columns and tasks over users/boards gRPC services",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.dispatcher = dispatcher
    app.state.sessions = sessions

    # Middleware order matters - first added = last executed
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    register_exception_handlers(app)

    # Prometheus metrics endpoint
    app.mount("/metrics", make_asgi_app())

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix="/api")
    app.include_router(boards.router, prefix="/api")
    app.include_router(columns.router, prefix="/api")
    app.include_router(tasks.router, prefix="/api")

    return app


app = create_app()
