"""API route modules."""

from . import boards, columns, health, tasks, users

__all__ = [
    "boards",
    "columns",
    "health",
    "tasks",
    "users",
]
