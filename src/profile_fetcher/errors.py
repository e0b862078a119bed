"""
Error types raised by the Profile Fetcher.
"""

from typing import Optional


class ProfileFetcherError(Exception):
    """Base class for all Profile Fetcher errors."""


class NotFoundError(ProfileFetcherError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        message = f"Not found (status {status_code})"
        if url:
            message = f"{message}: {url}"
        super().__init__(message)


class InvalidResponseError(ProfileFetcherError):
    """Raised when a 2xx response body is not the record the call expects."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        if url:
            message = f"{message}: {url}"
        super().__init__(message)
