"""Database layer for smbtax application."""

from smbtax.database.base import Database
from smbtax.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
