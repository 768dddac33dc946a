"""
Ordered-position allocation.

Boards, columns and tasks carry a 1-based `position` that is unique within
their scope (owner, board, column). The next position is computed and the row
inserted by a single statement:

    INSERT INTO boards (user_id, position, name, description)
    VALUES (:scope, (SELECT COALESCE(MAX(position), 0) + 1
                     FROM boards WHERE user_id = :scope), :name, :description)
    RETURNING ...

Two concurrent writers can still read the same MAX under READ COMMITTED; the
(scope, position) unique constraint rejects the loser, which rolls back and
recomputes. After `max_attempts` conflicts the allocator gives up with
`TransientStorageError`.

Positions are never reused or renumbered: deletes leave gaps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from prometheus_client import Counter
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskify.db.client import session_scope
from taskify.kernel.errors import TransientStorageError
from taskify.kernel.request_context import get_logger

DEFAULT_MAX_ATTEMPTS = 3

_position_allocation_retries_total = Counter(
    "taskify_position_allocation_retries_total",
    "Position allocations retried after a (scope, position) conflict",
    ["table"],
)


@dataclass(frozen=True)
class OrderedTable:
    """Describes a table whose rows are ordered within a scope column."""

    name: str
    scope_column: str
    # Name of the unique (scope_column, position) constraint.
    constraint: str
    # Columns supplied by the caller, besides scope and position.
    value_columns: tuple[str, ...]
    returning: tuple[str, ...]

    def insert_statement(self) -> str:
        columns = ", ".join((self.scope_column, "position", *self.value_columns))
        values = ", ".join(f":{column}" for column in self.value_columns)
        return (
            f"INSERT INTO {self.name} ({columns}) "
            f"VALUES (:scope, "
            f"(SELECT COALESCE(MAX(position), 0) + 1 FROM {self.name} "
            f"WHERE {self.scope_column} = :scope), {values}) "
            f"RETURNING {', '.join(self.returning)}"
        )


class PositionAllocator:
    """Inserts rows into an `OrderedTable` with the next free position."""

    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        table: OrderedTable,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._sessions = sessions
        self._table = table
        self._max_attempts = max_attempts
        self._statement = text(table.insert_statement())

    def _is_position_conflict(self, exc: IntegrityError) -> bool:
        detail = str(exc.orig).lower()
        if self._table.constraint in detail:
            return True
        # SQLite names the columns instead of the constraint.
        return "unique" in detail and f"{self._table.name}.position" in detail

    async def insert(self, scope: int, values: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a row under `scope` and return the RETURNING columns."""
        logger = get_logger(table=self._table.name, scope=scope)
        params = {"scope": scope, **{column: values[column] for column in self._table.value_columns}}

        for attempt in range(1, self._max_attempts + 1):
            try:
                async with session_scope(self._sessions) as session:
                    result = await session.execute(self._statement, params)
                    row = dict(result.mappings().one())
            except IntegrityError as exc:
                if not self._is_position_conflict(exc):
                    raise
                _position_allocation_retries_total.labels(self._table.name).inc()
                logger.warning("Position conflict, retrying allocation", attempt=attempt)
                continue

            logger.debug("Position allocated", position=row["position"], attempt=attempt)
            return row

        logger.error("Position allocation gave up", attempts=self._max_attempts)
        raise TransientStorageError(
            message="Could not allocate a position, try again",
            meta={"table": self._table.name},
        )
