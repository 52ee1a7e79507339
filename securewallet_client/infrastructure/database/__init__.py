"""Database infrastructure helpers (engine, sessions, table creation)."""

from .base import Base
from .session import build_engine, build_session_factory, init_storage

__all__ = ["Base", "build_engine", "build_session_factory", "init_storage"]
