"""Tests for the suggestion tally."""

from mdnest.domain.suggestions import SuggestionTally


def _values(tally: SuggestionTally, field: str) -> list[tuple[str, int]]:
    return [(s.value, s.count) for s in tally.result().for_field(field)]


class TestSuggestionTally:
    def test_empty(self) -> None:
        assert SuggestionTally().result().field_suggestions == {}

    def test_counts_lists_and_strings(self) -> None:
        tally = SuggestionTally()
        tally.add({"tags": ["a", "b"]})
        tally.add({"tags": ["a"]})
        tally.add({"tags": "a"})
        tally.add({"tags": "c"})
        assert _values(tally, "tags") == [("a", 3), ("b", 1), ("c", 1)]

    def test_ties_keep_first_seen_order(self) -> None:
        tally = SuggestionTally()
        tally.add({"status": "open"})
        tally.add({"status": "closed"})
        tally.add({"status": "blocked"})
        assert [v for v, _ in _values(tally, "status")] == ["open", "closed", "blocked"]

    def test_non_string_list_items_skipped(self) -> None:
        tally = SuggestionTally()
        tally.add({"tags": ["a", 1, None, {"x": 1}]})
        assert _values(tally, "tags") == [("a", 1)]

    def test_non_string_values_register_field(self) -> None:
        tally = SuggestionTally()
        tally.add({"rating": 5, "draft": True})
        result = tally.result()
        assert result.for_field("rating") == []
        assert set(result.field_suggestions) == {"rating", "draft"}

    def test_counts_are_positive(self) -> None:
        tally = SuggestionTally()
        tally.add({"a": "x", "b": ["y", "y"]})
        for suggestions in tally.result().field_suggestions.values():
            assert all(s.count >= 1 for s in suggestions)
        assert _values(tally, "b") == [("y", 2)]
