"""
Core modules for the Context7 MCP server.

This package contains the core business logic modules:
- logger: Logging infrastructure
- config: Immutable server settings
- models: Search and tool-call models
- errors: Context7 error types
- encryption: Client IP encryption and request headers
- api: Context7 HTTP client
- formatters: Search result rendering
- core: Tool dispatch
"""
