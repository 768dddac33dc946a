"""Persistence adapter for users (owned by the users service)."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.contexts.users.domain import User
from taskify.db.client import session_scope
from taskify.kernel.errors import AlreadyExistsError, NotFoundError
from taskify.kernel.request_context import get_logger

_INSERT_USER = text(
    """
    INSERT INTO users (email, username, password_hash)
    VALUES (:email, :username, :password_hash)
    RETURNING id, email, username, password_hash
    """
)

_SELECT_USER = text("SELECT id, email, username, password_hash FROM users WHERE id = :id")

_UPDATE_USER = text(
    """
    UPDATE users
    SET email = :email, username = :username, password_hash = :password_hash
    WHERE id = :id
    RETURNING id, email, username, password_hash
    """
)

_UPDATE_USER_KEEP_PASSWORD = text(
    """
    UPDATE users
    SET email = :email, username = :username
    WHERE id = :id
    RETURNING id, email, username, password_hash
    """
)

_DELETE_USER = text("DELETE FROM users WHERE id = :id")


def _user_not_found(user_id: int) -> NotFoundError:
    return NotFoundError(message="User not found", code="user.not_found", meta={"user_id": user_id})


def _email_taken(email: str) -> AlreadyExistsError:
    return AlreadyExistsError(message="User with this email already exists", code="user.email_taken")


class UserRepository:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def create(self, email: str, username: str, password_hash: str) -> User:
        try:
            async with session_scope(self._sessions) as session:
                result = await session.execute(
                    _INSERT_USER,
                    {"email": email, "username": username, "password_hash": password_hash},
                )
                row = result.mappings().one()
        except IntegrityError as exc:
            get_logger().info("User email already registered", error=str(exc.orig))
            raise _email_taken(email) from exc
        get_logger().debug("User created", user_id=row["id"])
        return User(**row)

    async def get(self, user_id: int) -> User:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_SELECT_USER, {"id": user_id})
            row = result.mappings().first()
        if row is None:
            get_logger().debug("User not found", user_id=user_id)
            raise _user_not_found(user_id)
        return User(**row)

    async def update(self, user_id: int, email: str, username: str, password_hash: str | None) -> User:
        params = {"id": user_id, "email": email, "username": username}
        statement = _UPDATE_USER_KEEP_PASSWORD
        if password_hash is not None:
            params["password_hash"] = password_hash
            statement = _UPDATE_USER
        try:
            async with session_scope(self._sessions) as session:
                result = await session.execute(statement, params)
                row = result.mappings().first()
        except IntegrityError as exc:
            raise _email_taken(email) from exc
        if row is None:
            raise _user_not_found(user_id)
        get_logger().debug("User updated", user_id=user_id)
        return User(**row)

    async def delete(self, user_id: int) -> None:
        async with session_scope(self._sessions) as session:
            result = await session.execute(_DELETE_USER, {"id": user_id})
        if result.rowcount == 0:
            raise _user_not_found(user_id)
        get_logger().debug("User deleted", user_id=user_id)
