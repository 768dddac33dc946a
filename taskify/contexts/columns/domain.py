from __future__ import annotations

from dataclasses import dataclass

NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class Column:
    id: int
    board_id: int
    position: int
    name: str
