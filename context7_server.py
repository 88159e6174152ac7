#!/usr/bin/env python3
"""
FastMCP server for Context7 documentation lookup.

This server provides tools to:
1. Resolve a library name to a Context7-compatible library ID
2. Fetch up-to-date documentation for a library from Context7

Usage:
    python context7_server.py [stdio|sse|http] [--api-key KEY] [--port PORT]
"""

import argparse
from typing import List, Optional

from fastmcp import FastMCP

from src.config import Settings, is_valid_api_key
from src.errors import InvalidAPIKeyError
from src.logger import setup_logging
from tools.library_tools import register_library_tools

SERVER_NAME = "Context7"
SERVER_VERSION = "1.0.13"
HOST = "127.0.0.1"
DEFAULT_PORT = 8604


def create_server(settings: Settings) -> FastMCP:
    """Create the FastMCP server and register all tools."""
    mcp = FastMCP(SERVER_NAME)
    register_library_tools(mcp, settings)
    return mcp


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="context7-mcp",
        description="Context7 MCP Server - Up-to-date Code Docs For Any Prompt",
    )
    parser.add_argument(
        "transport",
        nargs="?",
        default="stdio",
        choices=["stdio", "sse", "http"],
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("-a", "--api-key", help="API key for authentication (or set CONTEXT7_API_KEY env var)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port for sse/http transports (default: {DEFAULT_PORT})")
    parser.add_argument("--version", action="version", version=SERVER_VERSION)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    settings = Settings.from_env(api_key=args.api_key)

    logger = setup_logging(settings.logs_dir, settings.log_level)
    logger.info("Context7 MCP Server starting up", extra={'extra_data': {'transport': args.transport}})

    if settings.api_key and not is_valid_api_key(settings.api_key):
        logger.warning(str(InvalidAPIKeyError(settings.api_key)))
    if settings.proxy_url:
        logger.info("Using HTTP proxy", extra={'extra_data': {'proxy': settings.proxy_url}})

    mcp = create_server(settings)

    if args.transport == "sse":
        logger.info(f"Running with SSE transport on http://{HOST}:{args.port}")
        mcp.run(transport="sse", host=HOST, port=args.port)
    elif args.transport == "http":
        logger.info(f"Running with HTTP transport on http://{HOST}:{args.port}/mcp")
        mcp.run(transport="http", host=HOST, port=args.port, path="/mcp")
    else:
        logger.info("Running with STDIO transport")
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
