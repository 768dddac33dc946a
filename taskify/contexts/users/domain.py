from __future__ import annotations

from dataclasses import dataclass

EMAIL_MAX_LENGTH = 255
USERNAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6


@dataclass(frozen=True)
class User:
    id: int
    email: str
    username: str
    # Never leaves the users service.
    password_hash: str
