"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response
from sqlalchemy import text

from taskify import __version__
from taskify.db.client import session_scope
from taskify.kernel.request_context import get_logger

router = APIRouter(prefix="/health")

_startup_time = datetime.now(timezone.utc)


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the service is running.
    """
    now = datetime.now(timezone.utc)
    return {
        "status": "healthy",
        "service": "taskify-gateway",
        "version": __version__,
        "timestamp": now.isoformat(),
        "uptime_seconds": (now - _startup_time).total_seconds(),
    }


@router.get("/ready")
async def readiness_check(request: Request, response: Response):
    """
    Readiness check endpoint.
    Verifies the gateway's database is reachable.
    """
    checks = {"database": False}

    sessions = getattr(request.app.state, "sessions", None)
    if sessions is not None:
        try:
            async with session_scope(sessions) as session:
                await session.execute(text("SELECT 1"))
            checks["database"] = True
        except Exception as e:
            get_logger().warning("Database health check failed", error=str(e))

    all_healthy = all(checks.values())
    if not all_healthy:
        response.status_code = 503

    return {
        "status": "ready" if all_healthy else "degraded",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/live")
async def liveness_check():
    """Liveness check; 200 while the process is alive."""
    return {"status": "alive"}
