#!/usr/bin/env python3
"""
MCP tools for Context7 library resolution and documentation retrieval.

This module provides MCP tool wrappers around the core dispatcher.
"""

from typing import Annotated, Any, Dict, Optional

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.dependencies import get_http_request
from pydantic import Field

from src.api import Context7API
from src.config import Settings
from src.core import handle_tool_call
from src.logger import get_logger
from src.models import GET_LIBRARY_DOCS, RESOLVE_LIBRARY_ID, ArgumentValue, ToolCall

RESOLVE_LIBRARY_ID_DESCRIPTION = """Resolves a package/product name to a Context7-compatible library ID and returns a list of matching libraries.

You MUST call this function before 'get-library-docs' to obtain a valid Context7-compatible library ID UNLESS the user explicitly provides a library ID in the format '/org/project' or '/org/project/version' in their query.

Selection Process:
1. Analyze the query to understand what library/package the user is looking for
2. Return the most relevant match based on:
- Name similarity to the query (exact matches prioritized)
- Description relevance to the query's intent
- Documentation coverage (prioritize libraries with higher Code Snippet counts)
- Trust score (consider libraries with scores of 7-10 more authoritative)

Response Format:
- Return the selected library ID in a clearly marked section
- Provide a brief explanation for why this library was chosen
- If multiple good matches exist, acknowledge this but proceed with the most relevant one
- If no good matches exist, clearly state this and suggest query refinements

For ambiguous queries, request clarification before proceeding with a best-guess match."""

GET_LIBRARY_DOCS_DESCRIPTION = (
    "Fetches up-to-date documentation for a library. You must call 'resolve-library-id' first to obtain "
    "the exact Context7-compatible library ID required to use this tool, UNLESS the user explicitly provides "
    "a library ID in the format '/org/project' or '/org/project/version' in their query."
)

logger = get_logger()


def get_client_ip() -> Optional[str]:
    """
    Return the caller's IP when the tool runs inside an HTTP request.

    Forwarding headers take precedence over the socket peer. Returns None on
    the stdio transport.
    """
    try:
        request = get_http_request()
    except RuntimeError:
        return None

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host
    return None


def tokens_description(settings: Settings) -> str:
    return (
        f"Maximum number of tokens of documentation to retrieve (default: {settings.default_tokens}, "
        f"minimum: {settings.minimum_tokens}; smaller values are raised to the minimum). "
        "Higher values provide more context but consume more tokens."
    )


def collect_arguments(**values: Any) -> Dict[str, ArgumentValue]:
    """Drop arguments the caller did not send."""
    return {name: value for name, value in values.items() if value is not None}


def register_library_tools(mcp: FastMCP, settings: Settings, api: Optional[Context7API] = None):
    """Register the Context7 MCP tools."""
    api = api or Context7API(settings)

    async def run(call: ToolCall, ctx: Optional[Context]) -> str:
        result = await handle_tool_call(
            call,
            api,
            logger,
            client_ip=get_client_ip(),
            api_key=settings.api_key,
            ctx=ctx,
        )
        if result.is_error:
            raise ToolError(result.text)
        return result.text

    # Arguments are accepted untyped so that handle_tool_call alone validates
    # and converts them; the advertised schema is declared through Field.
    @mcp.tool(name=RESOLVE_LIBRARY_ID, description=RESOLVE_LIBRARY_ID_DESCRIPTION)
    async def resolve_library_id(
        ctx: Context,
        libraryName: Annotated[
            Any,
            Field(
                description="Library name to search for and retrieve a Context7-compatible library ID.",
                json_schema_extra={"type": "string"},
            ),
        ] = None,
    ) -> str:
        return await run(ToolCall(RESOLVE_LIBRARY_ID, collect_arguments(libraryName=libraryName)), ctx)

    @mcp.tool(name=GET_LIBRARY_DOCS, description=GET_LIBRARY_DOCS_DESCRIPTION)
    async def get_library_docs(
        ctx: Context,
        context7CompatibleLibraryID: Annotated[
            Any,
            Field(
                description=(
                    "Exact Context7-compatible library ID (e.g., '/mongodb/docs', '/vercel/next.js', "
                    "'/supabase/supabase', '/vercel/next.js/v14.3.0-canary.87') retrieved from "
                    "'resolve-library-id' or directly from user query in the format '/org/project' "
                    "or '/org/project/version'."
                ),
                json_schema_extra={"type": "string"},
            ),
        ] = None,
        topic: Annotated[
            Any,
            Field(
                description="Topic to focus documentation on (e.g., 'hooks', 'routing').",
                json_schema_extra={"type": "string"},
            ),
        ] = None,
        tokens: Annotated[
            Any,
            Field(
                description=tokens_description(settings),
                json_schema_extra={"type": "number"},
            ),
        ] = None,
    ) -> str:
        arguments = collect_arguments(
            context7CompatibleLibraryID=context7CompatibleLibraryID,
            topic=topic,
            tokens=tokens,
        )
        return await run(ToolCall(GET_LIBRARY_DOCS, arguments), ctx)

    resolve_library_id.parameters["required"] = ["libraryName"]
    get_library_docs.parameters["required"] = ["context7CompatibleLibraryID"]

    return api
