"""SQLAlchemy Core table definitions for the mdnest store database.

A single namespaced key-value table backs every named store
(``.settings.dat``, ``.frontmatter.dat``). Values are JSON text.
"""

from __future__ import annotations

from sqlalchemy import Column, MetaData, PrimaryKeyConstraint, Table, Text

metadata = MetaData()

store_entries = Table(
    "store_entries",
    metadata,
    Column("store", Text, nullable=False),
    Column("key", Text, nullable=False),
    Column("value", Text, nullable=False),  # JSON
    Column("updated", Text, nullable=False),
    PrimaryKeyConstraint("store", "key"),
)
