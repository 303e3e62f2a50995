"""SQLAlchemy models mirroring the JSON collection."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, Integer, String, Text

from .session import Base


class GreetingRow(Base):
    __tablename__ = "greetings"

    id = Column(Integer, primary_key=True, autoincrement=False)
    # Index of the record in the collection; keeps insertion order across saves.
    position = Column(Integer, nullable=False, index=True)
    language = Column(String(255), nullable=False, unique=True)
    greeting = Column(Text, nullable=False)
    formal = Column(Boolean, nullable=False, default=True)
