#!/usr/bin/env python3
"""
HTTP client for the Context7 API.

Provides library search and documentation retrieval, mapping HTTP and
transport failures onto the Context7 error types. Requests are never retried.
"""

import asyncio
from typing import Dict, Optional

import aiohttp
from pydantic import ValidationError

from .config import Settings
from .encryption import generate_headers
from .errors import (
    Context7Error,
    InvalidResponseError,
    LibraryNotFoundError,
    NetworkError,
    RateLimitedError,
    UnauthorizedError,
)
from .models import SearchResponse

SEARCH_PATH = "/v1/search"
DOCS_PATH_PREFIX = "/v1/"
DOCS_TYPE = "txt"
SOURCE_HEADER = "X-Context7-Source"
SOURCE_VALUE = "mcp-server"
USER_AGENT = "Context7-MCP-Python/1.0"

# Bodies the API sends instead of a 404 when a library has no documentation
EMPTY_DOCS_PLACEHOLDERS = ("No content available", "No context data available")


def map_status_to_error(
    status: int,
    reason: Optional[str] = None,
    api_key: Optional[str] = None,
    library_id: Optional[str] = None,
) -> Context7Error:
    """
    Translate an HTTP error status into a Context7 error.

    Args:
        status: HTTP status code of the failed response
        reason: HTTP reason phrase, used in the generic network error
        api_key: API key of the request, echoed back on 401
        library_id: Library being fetched, if any

    Returns:
        The matching Context7Error
    """
    if status == 401:
        return UnauthorizedError(
            f"Please check your API key. The API key you provided (possibly incorrect) is: {api_key}. "
            "API keys should start with 'ctx7sk'"
        )
    if status == 404:
        if library_id is not None:
            return LibraryNotFoundError(library_id)
        return InvalidResponseError("Resource not found")
    if status == 429:
        return RateLimitedError()
    return NetworkError(f"HTTP {status}: {reason or 'Request failed'}", status=status)


class Context7API:
    """Client for the Context7 search and documentation endpoints."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.base_url = self.settings.base_url.rstrip("/")
        self.proxy = self.settings.proxy_url

    async def _get(
        self,
        url: str,
        params: Dict[str, str],
        headers: Dict[str, str],
        logger,
        api_key: Optional[str] = None,
        library_id: Optional[str] = None,
    ) -> str:
        """Issue a GET request and return the body, raising Context7Error on failure."""
        logger.info(
            "Sending Context7 request",
            extra={'extra_data': {'url': url, 'params': params, 'proxy': self.proxy}}
        )

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout),
                headers={'User-Agent': USER_AGENT}
            ) as session:
                async with session.get(url, params=params, headers=headers, proxy=self.proxy) as response:
                    if response.status >= 400:
                        logger.warning(
                            "Context7 request failed",
                            extra={'extra_data': {'url': url, 'status': response.status}}
                        )
                        raise map_status_to_error(response.status, response.reason, api_key, library_id)
                    return await response.text()
        except aiohttp.ClientError as e:
            logger.error("Network error talking to Context7", extra={'extra_data': {'url': url, 'error': str(e)}})
            raise NetworkError(str(e) or e.__class__.__name__) from e
        except asyncio.TimeoutError as e:
            logger.error("Context7 request timed out", extra={'extra_data': {'url': url}})
            raise NetworkError("Request timed out") from e
        except UnicodeDecodeError as e:
            logger.error("Undecodable Context7 response body", extra={'extra_data': {'url': url, 'error': str(e)}})
            raise InvalidResponseError(f"Could not decode response body: {e}") from e

    async def search_libraries(
        self,
        query: str,
        logger,
        client_ip: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> SearchResponse:
        """
        Search for libraries matching the given query.

        Args:
            query: The search query
            logger: Logger instance
            client_ip: Optional client IP address to include in headers
            api_key: Optional API key for authentication

        Returns:
            Decoded search response
        """
        url = f"{self.base_url}{SEARCH_PATH}"
        headers = generate_headers(
            client_ip=client_ip,
            api_key=api_key,
            encryption_key=self.settings.encryption_key,
        )

        body = await self._get(url, {"query": query}, headers, logger, api_key=api_key)

        try:
            return SearchResponse.model_validate_json(body)
        except ValidationError as e:
            logger.error("Could not decode search response", extra={'extra_data': {'query': query}})
            raise InvalidResponseError(f"Failed to decode search response: {e}") from e

    async def fetch_library_documentation(
        self,
        library_id: str,
        logger,
        tokens: Optional[int] = None,
        topic: Optional[str] = None,
        client_ip: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> str:
        """
        Fetch documentation text for a library.

        Args:
            library_id: Context7-compatible library ID, e.g. /vercel/next.js
            logger: Logger instance
            tokens: Maximum number of tokens to retrieve, defaults to the configured budget
            topic: Optional topic to focus documentation on
            client_ip: Optional client IP address to include in headers
            api_key: Optional API key for authentication

        Returns:
            The documentation text, verbatim
        """
        clean_id = library_id[1:] if library_id.startswith("/") else library_id
        url = f"{self.base_url}{DOCS_PATH_PREFIX}{clean_id}"

        params = {
            "tokens": str(tokens if tokens is not None else self.settings.default_tokens),
            "type": DOCS_TYPE,
        }
        if topic is not None:
            params["topic"] = topic

        headers = generate_headers(
            client_ip=client_ip,
            api_key=api_key,
            extra_headers={SOURCE_HEADER: SOURCE_VALUE},
            encryption_key=self.settings.encryption_key,
        )

        text = await self._get(url, params, headers, logger, api_key=api_key, library_id=library_id)

        if not text or text in EMPTY_DOCS_PLACEHOLDERS:
            logger.warning("No documentation content returned", extra={'extra_data': {'library_id': library_id}})
            raise LibraryNotFoundError(library_id)

        return text
