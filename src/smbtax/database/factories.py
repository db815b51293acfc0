"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from smbtax.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "SMBTAX_DB_PATH"
DEFAULT_DB_DIR = ".smbtax"
DEFAULT_DB_NAME = "smbtax.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Resolve where the ledger database lives.

    An explicit path wins, then the SMBTAX_DB_PATH environment variable, then
    ~/.smbtax/smbtax.db. A leading ``~`` is expanded and the parent directory
    is created if missing.
    """
    raw = database_path or os.environ.get(DB_PATH_ENV)
    path = Path(raw).expanduser() if raw else Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, see resolve_database_path

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    logger.debug("Using ledger database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
