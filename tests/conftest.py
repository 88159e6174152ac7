"""
Shared pytest fixtures for the Context7 server tests.

aiohttp is never allowed to reach the network: the ``fake_http`` fixture
replaces ``aiohttp.ClientSession`` with an in-memory fake that records every
request and answers with a canned status and body.
"""

import logging

import aiohttp
import pytest

from src.models import SearchResult


class FakeResponse:
    def __init__(self, status, body, reason, text_exception=None):
        self.status = status
        self.reason = reason
        self._body = body
        self._text_exception = text_exception

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def text(self):
        if self._text_exception is not None:
            raise self._text_exception
        return self._body


class FakeSession:
    def __init__(self, http, **kwargs):
        self.http = http
        self.kwargs = kwargs

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def get(self, url, params=None, headers=None, proxy=None):
        self.http.requests.append({
            "url": url,
            "params": dict(params or {}),
            "headers": dict(headers or {}),
            "proxy": proxy,
            "session": self.kwargs,
        })
        if self.http.exception is not None:
            raise self.http.exception
        return FakeResponse(self.http.status, self.http.body, self.http.reason, self.http.text_exception)


class FakeHTTP:
    """Canned upstream: set status/body/exception, then inspect requests."""

    def __init__(self):
        self.status = 200
        self.reason = "OK"
        self.body = ""
        self.exception = None
        self.text_exception = None
        self.requests = []

    def respond(self, status=200, body="", reason="OK"):
        self.status = status
        self.body = body
        self.reason = reason

    def session(self, *args, **kwargs):
        return FakeSession(self, **kwargs)

    @property
    def last_request(self):
        return self.requests[-1]


@pytest.fixture
def fake_http(monkeypatch):
    http = FakeHTTP()
    monkeypatch.setattr(aiohttp, "ClientSession", http.session)
    return http


@pytest.fixture
def logger():
    return logging.getLogger("Context7ServerTests")


@pytest.fixture
def make_result():
    """Factory for SearchResult with sensible defaults."""
    def _make(**overrides):
        data = {
            "id": "/test/library",
            "title": "Test Library",
            "description": "A test library for testing",
            "branch": "main",
            "last_update_date": "2024-01-01",
            "state": "finalized",
            "total_tokens": 1000,
            "total_snippets": 50,
            "total_pages": 10,
            "stars": 100,
            "trust_score": 8,
            "versions": ["1.0.0", "1.1.0"],
        }
        data.update(overrides)
        return SearchResult(**data)
    return _make
