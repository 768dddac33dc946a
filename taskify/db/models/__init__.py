"""Database models."""

from taskify.db.models.base import Base
from taskify.db.models.boards import Board, BoardColumn
from taskify.db.models.tasks import Task
from taskify.db.models.users import User

__all__ = [
    "Base",
    "Board",
    "BoardColumn",
    "Task",
    "User",
]
