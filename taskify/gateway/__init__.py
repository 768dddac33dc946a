"""REST gateway: one routing contract over remote and local backends."""

from .backends import (
    LocalColumnsBackend,
    LocalTasksBackend,
    RemoteBoardsBackend,
    RemoteUsersBackend,
    ResourceBackend,
)
from .dispatcher import GatewayDispatcher, build_dispatcher

__all__ = [
    "GatewayDispatcher",
    "LocalColumnsBackend",
    "LocalTasksBackend",
    "RemoteBoardsBackend",
    "RemoteUsersBackend",
    "ResourceBackend",
    "build_dispatcher",
]
