"""Error handling — fetch, storage and consistency exceptions."""

from iconcache.errors.exceptions import (
    ConsistencyDriftError,
    FetchError,
    HttpStatusError,
    IconCacheError,
    MalformedVectorError,
    NetworkError,
    StorageError,
    TooLargeError,
)

__all__ = [
    "IconCacheError",
    "FetchError",
    "NetworkError",
    "HttpStatusError",
    "TooLargeError",
    "MalformedVectorError",
    "StorageError",
    "ConsistencyDriftError",
]
