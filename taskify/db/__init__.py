"""Relational storage module."""

from .client import (
    build_engine,
    build_session_factory,
    close_db,
    init_db,
    session_scope,
)
from .ordering import OrderedTable, PositionAllocator

__all__ = [
    "OrderedTable",
    "PositionAllocator",
    "build_engine",
    "build_session_factory",
    "close_db",
    "init_db",
    "session_scope",
]
