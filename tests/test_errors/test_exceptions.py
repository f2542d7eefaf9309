"""Tests for the exception hierarchy."""

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


class TestHierarchy:
    def test_fetch_errors(self):
        for cls in (NetworkError, HttpStatusError, TooLargeError, MalformedVectorError):
            assert issubclass(cls, FetchError)
            assert issubclass(cls, IconCacheError)

    def test_storage_and_drift_are_not_fetch_errors(self):
        assert not issubclass(StorageError, FetchError)
        assert not issubclass(ConsistencyDriftError, FetchError)
        assert issubclass(StorageError, IconCacheError)


class TestAttributes:
    def test_http_status(self):
        err = HttpStatusError("HTTP 404", url="http://x/a.svg", http_status=404)
        assert err.http_status == 404
        assert err.url == "http://x/a.svg"
        assert str(err) == "HTTP 404"

    def test_too_large(self):
        err = TooLargeError("too big", size=150_000, limit=100_000)
        assert err.size == 150_000
        assert err.limit == 100_000

    def test_network_keeps_original(self):
        cause = OSError("reset")
        err = NetworkError("failed", original=cause)
        assert err.original is cause

    def test_storage_operation(self):
        err = StorageError("write failed", operation="set", key="icon_cache_1")
        assert err.operation == "set"
        assert err.key == "icon_cache_1"
        assert err.message == "write failed"

    def test_drift(self):
        err = ConsistencyDriftError("missing", url="u", key="k")
        assert (err.url, err.key) == ("u", "k")
