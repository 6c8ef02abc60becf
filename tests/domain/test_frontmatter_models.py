"""Tests for schema and suggestion models."""

import pytest
from pydantic import ValidationError

from mdnest.domain.frontmatter import (
    FrontmatterField,
    FrontmatterSuggestion,
    FrontmatterSuggestions,
)
from mdnest.domain.types import FieldType


class TestFrontmatterField:
    def test_defaults_to_string(self) -> None:
        field = FrontmatterField(key=1, title="title")
        assert field.field_type == "string"
        assert field.kind is FieldType.STRING

    def test_legacy_type_key(self) -> None:
        field = FrontmatterField.model_validate({"key": 2, "title": "tags", "type": "string[]"})
        assert field.field_type == "string[]"
        assert field.kind is FieldType.STRING_LIST

    def test_unknown_type_kept_verbatim(self) -> None:
        field = FrontmatterField(key=1, title="c", field_type="color")
        assert field.field_type == "color"
        assert field.kind is FieldType.STRING

    def test_frozen(self) -> None:
        field = FrontmatterField(key=1, title="t")
        with pytest.raises(ValidationError):
            field.title = "other"  # type: ignore[misc]


class TestFrontmatterSuggestions:
    SUGGESTIONS = FrontmatterSuggestions(
        field_suggestions={
            "tags": [
                FrontmatterSuggestion(value="a", count=3),
                FrontmatterSuggestion(value="b", count=1),
            ]
        }
    )

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FrontmatterSuggestion(value="a", count=-1)

    def test_for_unknown_field(self) -> None:
        assert self.SUGGESTIONS.for_field("missing") == []

    def test_options_labels(self) -> None:
        assert self.SUGGESTIONS.options("tags") == [
            {"label": "a (3)", "value": "a"},
            {"label": "b (1)", "value": "b"},
        ]

    def test_options_bump_current_values(self) -> None:
        options = self.SUGGESTIONS.options("tags", ["b"])
        assert options[1] == {"label": "b (2)", "value": "b"}
        assert options[0]["label"] == "a (3)"

    def test_roundtrip_dump(self) -> None:
        dumped = self.SUGGESTIONS.model_dump()
        assert FrontmatterSuggestions.model_validate(dumped) == self.SUGGESTIONS
