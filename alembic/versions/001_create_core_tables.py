"""Create users, boards, columns and tasks.

Revision ID: 001_create_core_tables
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_create_core_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ==========================================================================
    # Users table (users service)
    # ==========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
    )

    # ==========================================================================
    # Boards table (boards service)
    # ==========================================================================
    op.create_table(
        "boards",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger, nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.UniqueConstraint("user_id", "position", name="uq_boards_user_id_position"),
    )
    op.create_index("ix_boards_user_id", "boards", ["user_id"])

    # ==========================================================================
    # Columns and tasks (gateway)
    # ==========================================================================
    op.create_table(
        "columns",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("board_id", sa.BigInteger, nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.UniqueConstraint("board_id", "position", name="uq_columns_board_id_position"),
    )
    op.create_index("ix_columns_board_id", "columns", ["board_id"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column(
            "column_id",
            sa.BigInteger,
            sa.ForeignKey("columns.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("assignee_id", sa.BigInteger, nullable=True),
        sa.UniqueConstraint("column_id", "position", name="uq_tasks_column_id_position"),
    )
    op.create_index("ix_tasks_column_id", "tasks", ["column_id"])


def downgrade() -> None:
    op.drop_index("ix_tasks_column_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_columns_board_id", table_name="columns")
    op.drop_table("columns")
    op.drop_index("ix_boards_user_id", table_name="boards")
    op.drop_table("boards")
    op.drop_table("users")
