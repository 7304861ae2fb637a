"""User model definitions."""

from enum import Enum

from sqlalchemy import Column, Integer, String
from backend.database import Base


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Represents a registered account."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String(30), nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, default=Role.USER.value)  # user/admin
