"""Database infrastructure: engine, session factory and connection lifecycle."""

from __future__ import annotations

from .session import Database, get_database

__all__ = ["Database", "get_database"]
