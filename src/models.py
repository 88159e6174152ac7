#!/usr/bin/env python3
"""
Data models for the Context7 MCP server.

Search models mirror the JSON returned by the Context7 search endpoint and use
aliases to map its camelCase keys onto snake_case attributes. Tool models are
the transient values passed between the MCP layer and the dispatcher.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RESOLVE_LIBRARY_ID = "resolve-library-id"
GET_LIBRARY_DOCS = "get-library-docs"

# Closed set of argument value types a tool call may carry
ArgumentValue = Union[str, int, float]


class DocumentState(str, Enum):
    """Processing state of a library in Context7."""
    INITIAL = "initial"
    FINALIZED = "finalized"
    ERROR = "error"
    DELETE = "delete"


class SearchResult(BaseModel):
    """A single library match returned by the search endpoint."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    description: str
    branch: str
    last_update_date: str = Field(alias="lastUpdateDate")
    state: DocumentState
    total_tokens: int = Field(alias="totalTokens")
    total_snippets: int = Field(alias="totalSnippets")
    total_pages: int = Field(alias="totalPages")
    stars: Optional[int] = None
    trust_score: Optional[int] = Field(default=None, alias="trustScore")
    versions: Optional[List[str]] = None


class SearchResponse(BaseModel):
    """Full response of the search endpoint."""

    model_config = ConfigDict(frozen=True)

    results: List[SearchResult]
    error: Optional[str] = None


@dataclass(frozen=True)
class ToolCall:
    """A named tool invocation and its raw arguments."""
    name: str
    arguments: Dict[str, ArgumentValue] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Rendered text returned to the MCP caller."""
    text: str
    is_error: bool = False

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)
