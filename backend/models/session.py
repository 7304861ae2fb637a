"""Session store model definitions."""

from sqlalchemy import Column, Float, String, Text
from backend.database import Base


class StoredSession(Base):
    """Represents a server-side session entry keyed by its cookie id."""
    __tablename__ = "sessions"

    id = Column(String, primary_key=True)
    payload = Column(Text, nullable=False)
    expires_at = Column(Float, nullable=False, index=True)
