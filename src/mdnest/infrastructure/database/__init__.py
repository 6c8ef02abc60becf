"""SQLite database engine and key-value schema via SQLAlchemy Core."""

from mdnest.infrastructure.database.engine import create_db_engine, init_database
from mdnest.infrastructure.database.schema import metadata, store_entries

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "store_entries",
]
