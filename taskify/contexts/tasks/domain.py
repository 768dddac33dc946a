from __future__ import annotations

from dataclasses import dataclass

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


@dataclass(frozen=True)
class Task:
    id: int
    column_id: int
    position: int
    title: str
    description: str = ""
    assignee_id: int | None = None
