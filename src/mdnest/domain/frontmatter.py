"""Frontmatter schema and suggestion models.

The schema is an ordered list of :class:`FrontmatterField` persisted by the
UI. Suggestions are rebuilt from the corpus on demand and never merged.

All models use Pydantic with frozen config for immutability.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from mdnest.domain.types import FieldType


class FrontmatterField(BaseModel):
    """One field definition in the persisted schema."""

    model_config = {"frozen": True}

    key: int
    title: str
    field_type: str = FieldType.STRING.value

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_type(cls, data: Any) -> Any:
        # Older schemas stored the tag under ``type``.
        if isinstance(data, dict) and "field_type" not in data and "type" in data:
            data = {**data, "field_type": data["type"]}
            data.pop("type")
        return data

    @property
    def kind(self) -> FieldType:
        """The recognised type tag (unknown tags resolve to STRING)."""
        return FieldType.parse(self.field_type)


class FrontmatterSuggestion(BaseModel):
    """A previously observed value of a field and how often it occurred."""

    model_config = {"frozen": True}

    value: str
    count: int = Field(ge=0)


class FrontmatterSuggestions(BaseModel):
    """Ranked suggestions per field title, most frequent first."""

    model_config = {"frozen": True}

    field_suggestions: dict[str, list[FrontmatterSuggestion]] = Field(default_factory=dict)

    def for_field(self, title: str) -> list[FrontmatterSuggestion]:
        return list(self.field_suggestions.get(title, []))

    def options(
        self,
        title: str,
        current_values: list[str] | None = None,
    ) -> list[dict[str, str]]:
        """Build select options for a form control.

        Values already chosen in the open document (*current_values*) are
        shown with their count bumped by one, since the document being
        edited is about to contribute that occurrence.
        """
        current = set(current_values or [])
        options: list[dict[str, str]] = []
        for suggestion in self.for_field(title):
            count = suggestion.count + (1 if suggestion.value in current else 0)
            options.append({"label": f"{suggestion.value} ({count})", "value": suggestion.value})
        return options
