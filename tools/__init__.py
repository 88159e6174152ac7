"""
MCP tools for the Context7 server.

This package contains MCP tool wrappers organized by functionality:
- library_tools: Library ID resolution and documentation retrieval
"""
