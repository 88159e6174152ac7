#!/usr/bin/env python3
"""
Core business logic for the Context7 MCP server.

This module turns tool invocations into Context7 API calls and renders the
outcome as tool results. Nothing here depends on the MCP transport: every
function takes and returns plain models, and every failure becomes a
ToolResult with the error flag set.
"""

import math
from typing import Optional

from fastmcp import Context

from .api import Context7API
from .errors import Context7Error, LibraryNotFoundError
from .formatters import format_search_results
from .models import GET_LIBRARY_DOCS, RESOLVE_LIBRARY_ID, ArgumentValue, ToolCall, ToolResult

SEARCH_FALLBACK_ERROR = "Failed to retrieve library documentation data from Context7"

DOCS_NOT_FOUND_MESSAGE = (
    "Documentation not found or not finalized for this library. This might have happened because "
    "you used an invalid Context7-compatible library ID. To get a valid Context7-compatible library ID, "
    "use the 'resolve-library-id' with the package name you wish to retrieve documentation for."
)

RESOLVE_RESULTS_PREAMBLE = """Available Libraries (top matches):

Each result includes:
- Library ID: Context7-compatible identifier (format: /org/project)
- Name: Library or package name
- Description: Short summary
- Code Snippets: Number of available code examples
- Trust Score: Authority indicator
- Versions: List of versions if available. Use one of those versions if the user provides a version in their query. The format of the version is /org/project/version.

For best results, select libraries based on name match, trust score, snippet coverage, and relevance to your use case.

----------

"""


def missing_parameter(name: str) -> ToolResult:
    return ToolResult.error(f"Missing required parameter: {name}")


def get_string_argument(call: ToolCall, name: str) -> Optional[str]:
    """Return a non-empty string argument, or None when absent, empty or not a string."""
    value = call.arguments.get(name)
    if isinstance(value, str) and value:
        return value
    return None


def get_tokens_argument(value: Optional[ArgumentValue], default: int, minimum: int) -> int:
    """
    Convert a raw tokens argument to a token budget.

    Integers are used as-is and floats are truncated toward zero. Anything
    else (missing, strings, booleans, NaN, infinity) gives the default.
    Budgets below the minimum are raised to it.
    """
    if isinstance(value, bool):
        tokens = default
    elif isinstance(value, int):
        tokens = value
    elif isinstance(value, float) and math.isfinite(value):
        tokens = int(value)
    else:
        tokens = default

    return max(tokens, minimum)


async def resolve_library_id_impl(
    library_name: str,
    api: Context7API,
    logger,
    client_ip: Optional[str] = None,
    api_key: Optional[str] = None,
    ctx: Optional[Context] = None,
) -> ToolResult:
    """
    Core implementation for resolving a library name to Context7 library IDs.

    Args:
        library_name: Library name to search for
        api: Context7 API client
        logger: Logger instance
        client_ip: Optional client IP forwarded to Context7
        api_key: Optional Context7 API key
        ctx: Optional FastMCP context for user feedback

    Returns:
        Formatted list of matching libraries, or an error result
    """
    if ctx:
        await ctx.info(f"Searching Context7 for '{library_name}'")
    logger.info("Resolving library id", extra={'extra_data': {'library_name': library_name}})

    try:
        response = await api.search_libraries(library_name, logger, client_ip=client_ip, api_key=api_key)
    except Context7Error as e:
        if ctx:
            await ctx.error(f"Library search failed: {e}")
        logger.error(
            "Library search failed",
            extra={'extra_data': {'library_name': library_name, 'error': str(e), 'error_type': type(e).__name__}}
        )
        return ToolResult.error(f"Error searching libraries: {e}")

    if not response.results:
        logger.warning(
            "No libraries matched",
            extra={'extra_data': {'library_name': library_name, 'upstream_error': response.error}}
        )
        return ToolResult.error(response.error or SEARCH_FALLBACK_ERROR)

    logger.info(
        "Resolved library candidates",
        extra={'extra_data': {'library_name': library_name, 'result_count': len(response.results)}}
    )
    return ToolResult(RESOLVE_RESULTS_PREAMBLE + format_search_results(response))


async def get_library_docs_impl(
    library_id: str,
    api: Context7API,
    logger,
    tokens: Optional[int] = None,
    topic: Optional[str] = None,
    client_ip: Optional[str] = None,
    api_key: Optional[str] = None,
    ctx: Optional[Context] = None,
) -> ToolResult:
    """
    Core implementation for fetching documentation of a Context7 library.

    Args:
        library_id: Context7-compatible library ID
        api: Context7 API client
        logger: Logger instance
        tokens: Token budget, already normalized
        topic: Optional topic to focus on
        client_ip: Optional client IP forwarded to Context7
        api_key: Optional Context7 API key
        ctx: Optional FastMCP context for user feedback

    Returns:
        The documentation text, or an error result
    """
    if ctx:
        await ctx.info(f"Fetching documentation for {library_id}")
    logger.info(
        "Fetching library documentation",
        extra={'extra_data': {'library_id': library_id, 'tokens': tokens, 'topic': topic}}
    )

    try:
        documentation = await api.fetch_library_documentation(
            library_id,
            logger,
            tokens=tokens,
            topic=topic,
            client_ip=client_ip,
            api_key=api_key,
        )
    except LibraryNotFoundError:
        if ctx:
            await ctx.error(f"No documentation found for {library_id}")
        logger.warning("Library documentation not found", extra={'extra_data': {'library_id': library_id}})
        return ToolResult.error(DOCS_NOT_FOUND_MESSAGE)
    except Context7Error as e:
        if ctx:
            await ctx.error(f"Error fetching docs: {e}")
        logger.error(
            "Error fetching library documentation",
            extra={'extra_data': {'library_id': library_id, 'error': str(e), 'error_type': type(e).__name__}}
        )
        return ToolResult.error(f"Error fetching library documentation: {e}")

    logger.info(
        "Fetched library documentation",
        extra={'extra_data': {'library_id': library_id, 'length': len(documentation)}}
    )
    return ToolResult(documentation)


async def handle_tool_call(
    call: ToolCall,
    api: Context7API,
    logger,
    client_ip: Optional[str] = None,
    api_key: Optional[str] = None,
    ctx: Optional[Context] = None,
) -> ToolResult:
    """
    Dispatch a tool call and convert every outcome into a ToolResult.

    Args:
        call: The tool invocation
        api: Context7 API client
        logger: Logger instance
        client_ip: Optional client IP forwarded to Context7
        api_key: Optional Context7 API key
        ctx: Optional FastMCP context for user feedback

    Returns:
        Success or error result; this function does not raise
    """
    try:
        if call.name == RESOLVE_LIBRARY_ID:
            library_name = get_string_argument(call, "libraryName")
            if library_name is None:
                return missing_parameter("libraryName")
            return await resolve_library_id_impl(
                library_name, api, logger, client_ip=client_ip, api_key=api_key, ctx=ctx
            )

        if call.name == GET_LIBRARY_DOCS:
            library_id = get_string_argument(call, "context7CompatibleLibraryID")
            if library_id is None:
                return missing_parameter("context7CompatibleLibraryID")
            tokens = get_tokens_argument(
                call.arguments.get("tokens"),
                api.settings.default_tokens,
                api.settings.minimum_tokens,
            )
            return await get_library_docs_impl(
                library_id,
                api,
                logger,
                tokens=tokens,
                topic=get_string_argument(call, "topic"),
                client_ip=client_ip,
                api_key=api_key,
                ctx=ctx,
            )

        logger.warning("Unknown tool requested", extra={'extra_data': {'tool': call.name}})
        return ToolResult.error(f"Unknown tool: {call.name}")

    except Exception as e:
        logger.error("Unexpected error handling tool call", exc_info=True, extra={'extra_data': {'tool': call.name}})
        return ToolResult.error(f"Unexpected error in {call.name}: {e}")
