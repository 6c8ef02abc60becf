"""Database engine setup for SQLite with WAL mode.

The store database lives at ``{data_dir}/mdnest.db`` and is accessed through
SQLAlchemy Core; there is no ORM layer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from mdnest.infrastructure.database.schema import metadata

DB_FILENAME = "mdnest.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(data_dir: Path) -> Engine:
    """Initialize the store database under *data_dir*.

    Creates the directory and the ``store_entries`` table. Idempotent, so it is
    safe to call on an existing data directory.
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(data_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
