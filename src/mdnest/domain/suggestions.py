"""Fold frontmatter values into ranked per-field suggestions."""

from __future__ import annotations

from collections import Counter
from typing import Any

from mdnest.domain.frontmatter import FrontmatterSuggestion, FrontmatterSuggestions
from mdnest.domain.types import ValueKind, value_kind


class SuggestionTally:
    """Accumulates value counts per field across many documents.

    Strings count once; lists count each string element. Other shapes
    (numbers, booleans, mappings) register the field but add no values.
    """

    def __init__(self) -> None:
        self._counts: dict[str, Counter[str]] = {}

    def add(self, frontmatter: dict[str, Any]) -> None:
        for title, value in frontmatter.items():
            counter = self._counts.setdefault(title, Counter())
            kind = value_kind(value)
            if kind == ValueKind.STRING:
                counter[value] += 1
            elif kind == ValueKind.LIST:
                counter.update(item for item in value if isinstance(item, str))

    def result(self) -> FrontmatterSuggestions:
        """Rank each field's values by descending count.

        Ties keep first-observed order (``Counter.most_common`` is stable).
        """
        return FrontmatterSuggestions(
            field_suggestions={
                title: [
                    FrontmatterSuggestion(value=value, count=count)
                    for value, count in counter.most_common()
                ]
                for title, counter in self._counts.items()
            }
        )
