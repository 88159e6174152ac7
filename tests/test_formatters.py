"""Tests for search result formatting."""

from src.formatters import format_search_result, format_search_results
from src.models import SearchResponse


class TestFormatSearchResult:

    def test_all_fields_present(self, make_result):
        formatted = format_search_result(make_result())

        assert formatted.splitlines() == [
            "- Title: Test Library",
            "- Context7-compatible library ID: /test/library",
            "- Description: A test library for testing",
            "- Code Snippets: 50",
            "- Trust Score: 8",
            "- Versions: 1.0.0, 1.1.0",
        ]

    def test_sentinel_and_missing_values_are_omitted(self, make_result):
        formatted = format_search_result(make_result(total_snippets=-1, trust_score=None, versions=None))

        assert "Code Snippets" not in formatted
        assert "Trust Score" not in formatted
        assert "Versions" not in formatted
        assert formatted.count("\n") == 2

    def test_trust_score_sentinel_is_omitted(self, make_result):
        assert "Trust Score" not in format_search_result(make_result(trust_score=-1))

    def test_empty_versions_are_omitted(self, make_result):
        assert "Versions" not in format_search_result(make_result(versions=[]))

    def test_zero_values_are_shown(self, make_result):
        formatted = format_search_result(make_result(total_snippets=0, trust_score=0))

        assert "- Code Snippets: 0" in formatted
        assert "- Trust Score: 0" in formatted


class TestFormatSearchResults:

    def test_empty_results(self):
        assert format_search_results(SearchResponse(results=[])) == (
            "No documentation libraries found matching your query."
        )

    def test_empty_results_with_error(self):
        response = SearchResponse(results=[], error="Something went wrong")
        assert format_search_results(response) == "No documentation libraries found matching your query."

    def test_two_results_are_separated_once(self, make_result):
        response = SearchResponse(results=[
            make_result(title="First Library", id="/first/lib"),
            make_result(title="Second Library", id="/second/lib"),
        ])

        formatted = format_search_results(response)

        assert "First Library" in formatted
        assert "Second Library" in formatted
        assert formatted.count("----------") == 1
        assert formatted.index("First Library") < formatted.index("Second Library")

    def test_single_result_has_no_separator(self, make_result):
        formatted = format_search_results(SearchResponse(results=[make_result()]))
        assert "----------" not in formatted
