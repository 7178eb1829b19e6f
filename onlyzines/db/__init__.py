"""Database helpers and base objects."""

from .base import Base, JSONType, metadata
from .session import SessionLocal, engine, get_db

__all__ = [
    "Base",
    "JSONType",
    "SessionLocal",
    "engine",
    "get_db",
    "metadata",
]
