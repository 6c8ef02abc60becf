"""FrontmatterService: schema persistence, suggestions, and form round trips.

The schema and the suggestion tables live in the ``.frontmatter.dat``
store. Suggestions are always rebuilt wholesale from the corpus.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from mdnest.domain.forms import form_from_metadata, metadata_from_form
from mdnest.domain.frontmatter import FrontmatterField, FrontmatterSuggestions
from mdnest.domain.types import FieldType
from mdnest.infrastructure.corpus import aggregate_suggestions
from mdnest.infrastructure.filesystem import read_document, write_document
from mdnest.infrastructure.store import (
    FIELDS_KEY,
    FRONTMATTER_STORE,
    SUGGESTIONS_KEY,
    StoreError,
)
from mdnest.services.base import BaseService
from mdnest.services.result import ServiceResult
from mdnest.services.telemetry import trace_span, traced
from mdnest.services.tree import TreeService

logger = logging.getLogger(__name__)

_SCHEMA_ADAPTER = TypeAdapter(list[FrontmatterField])


class FrontmatterService(BaseService):
    """Handles the frontmatter schema, suggestion tables, and document forms."""

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def _read_schema(self, warnings: list[str]) -> list[FrontmatterField]:
        raw = self._workspace.store(FRONTMATTER_STORE).get(FIELDS_KEY, [])
        try:
            return _SCHEMA_ADAPTER.validate_python(raw)
        except ValidationError as exc:
            logger.warning("Stored frontmatter schema is invalid: %s", exc)
            warnings.append("Stored frontmatter schema is invalid and was ignored")
            return []

    def _write_schema(self, fields: list[FrontmatterField], warnings: list[str]) -> None:
        store = self._workspace.store(FRONTMATTER_STORE)
        dumped = [f.model_dump() for f in fields]
        store.set(FIELDS_KEY, dumped)
        store.save()
        self._dispatch_event("post_save_schema", {"fields": dumped}, warnings)

    @traced
    def load_schema(self) -> ServiceResult:
        op = "load_schema"
        warnings: list[str] = []
        try:
            fields = self._read_schema(warnings)
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={"fields": [f.model_dump() for f in fields], "count": len(fields)},
            warnings=warnings,
        )

    @traced
    def save_schema(self, fields: Iterable[FrontmatterField | Mapping[str, Any]]) -> ServiceResult:
        """Replace the stored schema with *fields*, keeping their order."""
        op = "save_schema"
        try:
            validated = _SCHEMA_ADAPTER.validate_python(
                [f.model_dump() if isinstance(f, FrontmatterField) else dict(f) for f in fields]
            )
        except ValidationError as exc:
            return ServiceResult.failure(op, "INVALID_SCHEMA", f"Invalid schema: {exc}")

        warnings: list[str] = []
        try:
            self._write_schema(validated, warnings)
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={"fields": [f.model_dump() for f in validated], "count": len(validated)},
            warnings=warnings,
        )

    @traced
    def add_field(self, title: str, field_type: str = FieldType.STRING.value) -> ServiceResult:
        """Append a field with the next free key."""
        op = "add_field"
        title = title.strip()
        if not title:
            return ServiceResult.failure(op, "INVALID_FIELD", "Field title cannot be empty")

        warnings: list[str] = []
        try:
            fields = self._read_schema(warnings)
            if any(f.title == title for f in fields):
                return ServiceResult.failure(
                    op, "DUPLICATE_FIELD", f"Field '{title}' already exists", title=title
                )
            field = FrontmatterField(
                key=max((f.key for f in fields), default=0) + 1,
                title=title,
                field_type=field_type,
            )
            self._write_schema([*fields, field], warnings)
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))

        if field.kind.value != field_type:
            warnings.append(f"Unknown field type '{field_type}' will be treated as string")
        return ServiceResult(ok=True, op=op, data={"field": field.model_dump()}, warnings=warnings)

    @traced
    def remove_field(self, title: str) -> ServiceResult:
        op = "remove_field"
        warnings: list[str] = []
        try:
            fields = self._read_schema(warnings)
            remaining = [f for f in fields if f.title != title]
            if len(remaining) == len(fields):
                return ServiceResult.failure(
                    op, "FIELD_NOT_FOUND", f"No field named '{title}'", title=title
                )
            self._write_schema(remaining, warnings)
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))
        return ServiceResult(
            ok=True, op=op, data={"title": title, "count": len(remaining)}, warnings=warnings
        )

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    @traced
    def collect_suggestions(self, root: str | Path | None = None) -> ServiceResult:
        """Rebuild suggestions from every document under *root*.

        Falls back to the stored working directory. With neither, the
        stored suggestions are reset to empty.
        """
        op = "collect_suggestions"
        warnings: list[str] = []
        try:
            if root is None:
                root = TreeService(self._workspace).stored_path()

            if root is None:
                suggestions = FrontmatterSuggestions()
                warnings.append("No working directory set; suggestions cleared")
            else:
                with trace_span("aggregate") as span:
                    suggestions = aggregate_suggestions(
                        Path(root).expanduser(),
                        extension=self.settings.documents.extension,
                        encoding=self.settings.documents.encoding,
                    )
                    if span:
                        span.annotate("fields", len(suggestions.field_suggestions))

            store = self._workspace.store(FRONTMATTER_STORE)
            store.set(SUGGESTIONS_KEY, suggestions.model_dump())
            store.save()
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))

        root_str = str(root) if root is not None else None
        field_count = len(suggestions.field_suggestions)
        self._dispatch_event(
            "post_collect_suggestions", {"root": root_str, "field_count": field_count}, warnings
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": root_str,
                "field_count": field_count,
                "fields": {
                    title: len(values)
                    for title, values in suggestions.field_suggestions.items()
                },
            },
            warnings=warnings,
        )

    def _read_suggestions(self, warnings: list[str]) -> FrontmatterSuggestions:
        raw = self._workspace.store(FRONTMATTER_STORE).get(SUGGESTIONS_KEY)
        if raw is None:
            return FrontmatterSuggestions()
        try:
            return FrontmatterSuggestions.model_validate(raw)
        except ValidationError:
            warnings.append("Stored suggestions are invalid and were ignored")
            return FrontmatterSuggestions()

    @traced
    def load_suggestions(
        self,
        field: str | None = None,
        current: list[str] | None = None,
    ) -> ServiceResult:
        """Return stored suggestions, or the options for a single *field*."""
        op = "load_suggestions"
        warnings: list[str] = []
        try:
            suggestions = self._read_suggestions(warnings)
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))

        if field is None:
            return ServiceResult(ok=True, op=op, data=suggestions.model_dump(), warnings=warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "field": field,
                "suggestions": [s.model_dump() for s in suggestions.for_field(field)],
                "options": suggestions.options(field, current),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Documents and forms
    # ------------------------------------------------------------------

    def _read(self, path: Path) -> tuple[dict[str, Any] | None, str]:
        return read_document(path, encoding=self.settings.documents.encoding)

    @traced
    def read_form(self, path: str | Path) -> ServiceResult:
        """Open a document and coerce its frontmatter into form values."""
        op = "read_form"
        doc_path = Path(path)
        warnings: list[str] = []
        try:
            metadata, body = self._read(doc_path)
            schema = self._read_schema(warnings)
        except FileNotFoundError:
            return ServiceResult.failure(op, "NOT_FOUND", f"File does not exist: {doc_path}")
        except (OSError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(op, "UNREADABLE", f"Cannot read {doc_path}: {exc}")
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(doc_path),
                "has_frontmatter": metadata is not None,
                "metadata": metadata or {},
                "values": form_from_metadata(schema, metadata),
                "body": body,
            },
            warnings=warnings,
        )

    @traced
    def save_form(
        self,
        path: str | Path,
        values: Mapping[str, Any],
        body: str | None = None,
    ) -> ServiceResult:
        """Coerce form *values* into frontmatter and write the document.

        When *body* is None the existing body is kept. Keys in the existing
        frontmatter that the schema does not describe are preserved.
        """
        op = "save_form"
        doc_path = Path(path)
        warnings: list[str] = []
        try:
            schema = self._read_schema(warnings)
            existing: dict[str, Any] = {}
            existing_body = ""
            if doc_path.exists():
                found, existing_body = self._read(doc_path)
                existing = found or {}
        except (OSError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(op, "UNREADABLE", f"Cannot read {doc_path}: {exc}")
        except StoreError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))

        titles = {f.title for f in schema}
        metadata = metadata_from_form(schema, values)
        metadata.update({k: v for k, v in existing.items() if k not in titles})
        return self._save(op, doc_path, metadata, existing_body if body is None else body, warnings)

    @traced
    def save_document(
        self,
        path: str | Path,
        metadata: Mapping[str, Any],
        body: str,
    ) -> ServiceResult:
        """Write *body* with *metadata* as frontmatter (omitted when empty)."""
        return self._save("save_document", Path(path), dict(metadata), body, [])

    def _save(
        self,
        op: str,
        path: Path,
        metadata: dict[str, Any],
        body: str,
        warnings: list[str],
    ) -> ServiceResult:
        try:
            written = write_document(
                path, metadata, body, encoding=self.settings.documents.encoding
            )
        except OSError as exc:
            return ServiceResult.failure(op, "WRITE_FAILED", f"Failed to write {path}: {exc}")

        self._dispatch_event(
            "post_save_document", {"path": str(path), "has_frontmatter": written}, warnings
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "has_frontmatter": written, "metadata": metadata},
            warnings=warnings,
        )
