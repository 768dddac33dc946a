from __future__ import annotations

from dataclasses import dataclass

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000


@dataclass(frozen=True)
class Board:
    id: int
    user_id: int
    position: int
    name: str
    description: str = ""
