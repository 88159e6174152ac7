"""
Error types for Context7 operations.

Every error carries a user-facing description via ``str(error)``. None of them
are fatal: the tool dispatcher turns each one into an error tool result.
"""

from typing import Optional


class Context7Error(Exception):
    """Base class for all Context7 failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidAPIKeyError(Context7Error):
    def __init__(self, api_key: str):
        self.api_key = api_key
        super().__init__(f"Invalid API key: {api_key}. API keys should start with 'ctx7sk'")


class RateLimitedError(Context7Error):
    def __init__(self):
        super().__init__("Rate limited due to too many requests. Please try again later.")


class LibraryNotFoundError(Context7Error):
    def __init__(self, library_id: str):
        self.library_id = library_id
        super().__init__(
            f"The library '{library_id}' does not exist. Please try with a different library ID."
        )


class NetworkError(Context7Error):
    def __init__(self, detail: str, status: Optional[int] = None):
        self.detail = detail
        self.status = status
        super().__init__(f"Network error: {detail}")


class EncryptionError(Context7Error):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Encryption error: {detail}")


class InvalidResponseError(Context7Error):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid response: {detail}")


class UnauthorizedError(Context7Error):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Unauthorized: {detail}")
