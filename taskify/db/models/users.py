from sqlalchemy import Column, String, Text

from taskify.db.models.base import Base
from taskify.db.models.boards import Identifier


class User(Base):
    __tablename__ = "users"

    id = Column(Identifier, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(100), nullable=False)
    password_hash = Column(Text, nullable=False)
