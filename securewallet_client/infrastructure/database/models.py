"""SQLAlchemy ORM models."""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from .base import Base


class StoredCredential(Base):
    __tablename__ = "stored_credentials"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
