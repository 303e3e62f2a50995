"""Database helpers (engine/session export)."""

from .session import Base, get_engine, get_session, make_engine

__all__ = ["Base", "get_engine", "get_session", "make_engine"]
