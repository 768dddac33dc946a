"""User use cases, called by the gRPC adapter (`UsersServicer`)."""

from __future__ import annotations

from taskify.contexts.users.domain import (
    EMAIL_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    User,
)
from taskify.contexts.users.passwords import hash_password
from taskify.contexts.users.repository import UserRepository
from taskify.kernel.errors import ValidationFailedError
from taskify.kernel.request_context import get_logger
from taskify.kernel.validation import require_id, require_text


def _clean_email(email: str | None) -> str:
    cleaned = require_text("email", email, max_length=EMAIL_MAX_LENGTH).lower()
    if "@" not in cleaned:
        raise ValidationFailedError("email", "must be a valid email address")
    return cleaned


def _check_password(password: str | None) -> str:
    if not password:
        raise ValidationFailedError("password", "is required")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationFailedError("password", f"must be at least {PASSWORD_MIN_LENGTH} characters")
    return password


class UsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def create(self, email: str, username: str, password: str) -> User:
        email = _clean_email(email)
        username = require_text("username", username, max_length=USERNAME_MAX_LENGTH)
        password_hash = hash_password(_check_password(password))

        user = await self._repository.create(email, username, password_hash)
        get_logger().info("User created", user_id=user.id)
        return user

    async def get(self, user_id: int) -> User:
        return await self._repository.get(require_id("id", user_id))

    async def update(self, user_id: int, email: str, username: str, password: str | None = None) -> User:
        """Replace email and username; the password changes only when given (`None` keeps it)."""
        user_id = require_id("id", user_id)
        email = _clean_email(email)
        username = require_text("username", username, max_length=USERNAME_MAX_LENGTH)
        password_hash = hash_password(_check_password(password)) if password is not None else None
        return await self._repository.update(user_id, email, username, password_hash)

    async def delete(self, user_id: int) -> None:
        await self._repository.delete(require_id("id", user_id))
        get_logger().info("User deleted", user_id=user_id)
