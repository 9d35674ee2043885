"""SQLAlchemy ORM models for StepClock."""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class KeyValue(Base):
    """One serialized blob per well-known key (e.g. the preset collection)."""

    __tablename__ = "key_values"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def __repr__(self) -> str:
        return f"<KeyValue key={self.key} size={len(self.value or '')}>"
