"""Tests for decoding Context7 search responses."""

import json

import pytest
from pydantic import ValidationError

from src.models import DocumentState, SearchResponse, ToolResult

RESULT_JSON = {
    "id": "/vercel/next.js",
    "title": "Next.js",
    "description": "The React Framework",
    "branch": "canary",
    "lastUpdateDate": "2025-05-01T10:00:00.000Z",
    "state": "finalized",
    "totalTokens": 500000,
    "totalSnippets": 3000,
    "totalPages": 400,
    "stars": 120000,
    "trustScore": 10,
    "versions": ["v14.3.0-canary.87", "v15.1.8"],
}


def test_decodes_camel_case_payload():
    response = SearchResponse.model_validate_json(json.dumps({"results": [RESULT_JSON]}))

    result = response.results[0]
    assert response.error is None
    assert result.id == "/vercel/next.js"
    assert result.last_update_date == "2025-05-01T10:00:00.000Z"
    assert result.state is DocumentState.FINALIZED
    assert result.total_snippets == 3000
    assert result.trust_score == 10
    assert result.versions == ["v14.3.0-canary.87", "v15.1.8"]


def test_optional_fields_default_to_none():
    payload = {k: v for k, v in RESULT_JSON.items() if k not in ("stars", "trustScore", "versions")}

    result = SearchResponse.model_validate({"results": [payload]}).results[0]

    assert result.stars is None
    assert result.trust_score is None
    assert result.versions is None


def test_error_with_empty_results():
    response = SearchResponse.model_validate_json('{"error": "Too many requests", "results": []}')

    assert response.error == "Too many requests"
    assert response.results == []


@pytest.mark.parametrize("payload", [
    '{"error": "missing results"}',
    '{"results": [{"id": "/only/id"}]}',
    '{"results": [' + json.dumps(dict(RESULT_JSON, state="archived")) + ']}',
    "not json",
])
def test_strict_decode_rejects_malformed_payloads(payload):
    with pytest.raises(ValidationError):
        SearchResponse.model_validate_json(payload)


def test_search_result_is_immutable():
    result = SearchResponse.model_validate({"results": [RESULT_JSON]}).results[0]

    with pytest.raises(ValidationError):
        result.title = "Changed"


def test_tool_result_error_constructor():
    result = ToolResult.error("boom")

    assert result.text == "boom"
    assert result.is_error
    assert not ToolResult("ok").is_error
