#!/usr/bin/env python3
"""
Configuration for the Context7 MCP server.

Settings are resolved once at startup and are read-only afterwards.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

BASE_URL = "https://context7.com/api"
DEFAULT_TOKENS = 5000
MINIMUM_TOKENS = 1000
DEFAULT_REQUEST_TIMEOUT = 30.0
API_KEY_PREFIX = "ctx7sk"

API_KEY_ENV = "CONTEXT7_API_KEY"
ENCRYPTION_KEY_ENV = "CLIENT_IP_ENCRYPTION_KEY"
LOGS_DIR_ENV = "CONTEXT7_LOGS_DIR"
LOG_LEVEL_ENV = "CONTEXT7_LOG_LEVEL"

# Checked in order, first usable value wins
PROXY_ENV_VARS = ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy")


def find_proxy_url(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Return the first proxy URL found in the standard proxy variables.

    Values that still hold an unexpanded shell reference (``$HTTP_PROXY``) or
    that do not start with ``http`` are skipped.
    """
    if environ is None:
        environ = os.environ

    for name in PROXY_ENV_VARS:
        value = environ.get(name)
        if value and not value.startswith("$") and value.startswith("http"):
            return value
    return None


def is_valid_api_key(api_key: str) -> bool:
    return api_key.startswith(API_KEY_PREFIX)


@dataclass(frozen=True)
class Settings:
    """Immutable server configuration."""
    api_key: Optional[str] = None
    base_url: str = BASE_URL
    default_tokens: int = DEFAULT_TOKENS
    minimum_tokens: int = MINIMUM_TOKENS
    proxy_url: Optional[str] = None
    encryption_key: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    logs_dir: Path = field(default_factory=lambda: Path("./logs"))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, api_key: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from an explicit API key and the process environment.

        Args:
            api_key: API key given on the command line, takes precedence over CONTEXT7_API_KEY
            environ: Environment mapping, defaults to os.environ

        Returns:
            Settings instance
        """
        if environ is None:
            environ = os.environ

        return cls(
            api_key=api_key or environ.get(API_KEY_ENV) or None,
            proxy_url=find_proxy_url(environ),
            encryption_key=environ.get(ENCRYPTION_KEY_ENV) or None,
            logs_dir=Path(environ.get(LOGS_DIR_ENV, "./logs")),
            log_level=environ.get(LOG_LEVEL_ENV, "INFO"),
        )
