"""Named key-value stores persisted in SQLite.

Each store is a namespace (historically a file name such as
``.settings.dat``) of JSON values. Writes are staged by :meth:`set` and
:meth:`delete` and only reach the database on :meth:`save`, which flushes
everything in one transaction.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError

from mdnest.infrastructure.database.schema import store_entries

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SETTINGS_STORE = ".settings.dat"
FRONTMATTER_STORE = ".frontmatter.dat"

SELECTED_PATH_KEY = "selectedPath"
FIELDS_KEY = "frontmatter_fields"
SUGGESTIONS_KEY = "frontmatter_suggestions"

_DELETED = object()


class StoreError(Exception):
    """The persistence layer failed to read or write."""

    code = "STORE_ERROR"


class KeyValueStore:
    """JSON key-value access to one named store."""

    def __init__(self, engine: Engine, name: str) -> None:
        self._engine = engine
        self.name = name
        self._pending: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for *key*, including unsaved staged writes."""
        if key in self._pending:
            staged = self._pending[key]
            return default if staged is _DELETED else staged

        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(store_entries.c.value).where(
                        store_entries.c.store == self.name,
                        store_entries.c.key == key,
                    )
                ).first()
        except SQLAlchemyError as exc:
            msg = f"Failed to read {key!r} from store {self.name}: {exc}"
            raise StoreError(msg) from exc

        if row is None:
            return default
        try:
            return json.loads(row.value)
        except json.JSONDecodeError:
            logger.warning("Corrupt value for %s in store %s", key, self.name)
            return default

    def has(self, key: str) -> bool:
        return self.get(key, _DELETED) is not _DELETED

    def set(self, key: str, value: Any) -> None:
        """Stage *value* under *key*. Must be JSON-serialisable."""
        json.dumps(value)
        self._pending[key] = value

    def delete(self, key: str) -> None:
        self._pending[key] = _DELETED

    @property
    def dirty(self) -> bool:
        return bool(self._pending)

    def save(self) -> None:
        """Flush staged writes in a single transaction."""
        if not self._pending:
            return
        now = datetime.now(UTC).isoformat()
        try:
            with self._engine.begin() as conn:
                for key, value in self._pending.items():
                    if value is _DELETED:
                        conn.execute(
                            delete(store_entries).where(
                                store_entries.c.store == self.name,
                                store_entries.c.key == key,
                            )
                        )
                        continue
                    stmt = insert(store_entries).values(
                        store=self.name, key=key, value=json.dumps(value), updated=now
                    )
                    conn.execute(
                        stmt.on_conflict_do_update(
                            index_elements=[store_entries.c.store, store_entries.c.key],
                            set_={"value": stmt.excluded.value, "updated": stmt.excluded.updated},
                        )
                    )
        except SQLAlchemyError as exc:
            msg = f"Failed to save store {self.name}: {exc}"
            raise StoreError(msg) from exc
        logger.debug("Saved %d entries to store %s", len(self._pending), self.name)
        self._pending.clear()
