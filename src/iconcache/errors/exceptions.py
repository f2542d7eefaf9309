"""Custom exception hierarchy for iconcache."""

from __future__ import annotations

from typing import Any


class IconCacheError(Exception):
    """Base exception for all iconcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class FetchError(IconCacheError):
    """Fetching an asset from the remote origin failed.

    Always recoverable: the cache facade turns every fetch error into a miss.
    """

    def __init__(self, message: str = "", url: str = "") -> None:
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """Transport-level failure such as a refused connection or a timeout."""

    def __init__(
        self,
        message: str = "",
        url: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.original = original


class HttpStatusError(FetchError):
    """The origin answered with a non-2xx status."""

    def __init__(self, message: str = "", url: str = "", http_status: int = 0) -> None:
        super().__init__(message, url=url)
        self.http_status = http_status


class TooLargeError(FetchError):
    """Vector markup exceeds the inline size limit."""

    def __init__(self, message: str = "", url: str = "", size: int = 0, limit: int = 0) -> None:
        super().__init__(message, url=url)
        self.size = size
        self.limit = limit


class MalformedVectorError(FetchError):
    """Declared vector markup without a well-formed root element (strict mode only)."""


class StorageError(IconCacheError):
    """A read, write or delete against the key-value store failed."""

    def __init__(
        self,
        message: str = "",
        operation: str = "",
        key: str | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.key = key
        self.original = original


class ConsistencyDriftError(IconCacheError):
    """Ledger and entry store disagree about a URL.

    Example: a metadata record whose payload is missing or unreadable.
    """

    def __init__(self, message: str = "", url: str = "", key: str = "") -> None:
        super().__init__(message)
        self.url = url
        self.key = key
