#!/usr/bin/env python3
"""
Formatting of search results into text for the MCP caller.
"""

from .models import SearchResponse, SearchResult

NO_RESULTS_MESSAGE = "No documentation libraries found matching your query."
RESULT_SEPARATOR = "\n----------\n"


def format_search_result(result: SearchResult) -> str:
    """
    Format a single search result.

    Snippet count, trust score and versions are only shown when available
    (not -1, not missing, not empty).
    """
    lines = [
        f"- Title: {result.title}",
        f"- Context7-compatible library ID: {result.id}",
        f"- Description: {result.description}",
    ]

    if result.total_snippets != -1:
        lines.append(f"- Code Snippets: {result.total_snippets}")

    if result.trust_score is not None and result.trust_score != -1:
        lines.append(f"- Trust Score: {result.trust_score}")

    if result.versions:
        lines.append(f"- Versions: {', '.join(result.versions)}")

    return "\n".join(lines)


def format_search_results(response: SearchResponse) -> str:
    """Format every result of a search response, separated by a dashed line."""
    if not response.results:
        return NO_RESULTS_MESSAGE

    return RESULT_SEPARATOR.join(format_search_result(result) for result in response.results)
