from sqlalchemy import BigInteger, Column, ForeignKey, Integer, Text, UniqueConstraint

from taskify.db.models.base import Base
from taskify.db.models.boards import Identifier


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        UniqueConstraint("column_id", "position", name="uq_tasks_column_id_position"),
    )

    id = Column(Identifier, primary_key=True, autoincrement=True)
    column_id = Column(
        BigInteger, ForeignKey("columns.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    assignee_id = Column(BigInteger, nullable=True)
