"""Board and column tables.

Positions are allocated server-side (see `taskify.db.ordering`); the unique
constraints are the backstop against two writers picking the same position.
"""

from sqlalchemy import BigInteger, Column, Integer, Text, UniqueConstraint

from taskify.db.models.base import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
Identifier = BigInteger().with_variant(Integer, "sqlite")


class Board(Base):
    __tablename__ = "boards"
    __table_args__ = (
        UniqueConstraint("user_id", "position", name="uq_boards_user_id_position"),
    )

    id = Column(Identifier, primary_key=True, autoincrement=True)
    user_id = Column(BigInteger, nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")


class BoardColumn(Base):
    __tablename__ = "columns"
    __table_args__ = (
        UniqueConstraint("board_id", "position", name="uq_columns_board_id_position"),
    )

    id = Column(Identifier, primary_key=True, autoincrement=True)
    # Boards live in the boards service; no cross-service foreign key.
    board_id = Column(BigInteger, nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(Text, nullable=False)
