import httpx
import pytest

from iconcache.config.schema import CacheConfig
from iconcache.core import IconCache
from iconcache.fetch.fetcher import ContentFetcher
from iconcache.storage.memory import MemoryStore

SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M0 0h24v24H0z"/></svg>'


class FakeClock:
    """Manually advanced clock; each call returns the current time."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeOrigin:
    """Routes requests by URL and counts how often each was requested."""

    def __init__(self) -> None:
        self.calls: dict[str, int] = {}
        self.routes: dict[str, tuple[int, dict[str, str], bytes]] = {}

    def add(self, url: str, status: int = 200, body: str | bytes = "", content_type: str = ""):
        headers = {"content-type": content_type} if content_type else {}
        content = body.encode("utf-8") if isinstance(body, str) else body
        self.routes[url] = (status, headers, content)

    def add_svg(self, url: str, body: str = SVG):
        self.add(url, body=body, content_type="image/svg+xml")

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls[url] = self.calls.get(url, 0) + 1
        if url not in self.routes:
            return httpx.Response(404, text="not found")
        status, headers, content = self.routes[url]
        return httpx.Response(status, headers=headers, content=content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def origin():
    return FakeOrigin()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_cache(store, origin, clock):
    """Build an IconCache over the in-memory store and fake origin."""

    def _make(**config_overrides) -> IconCache:
        config = CacheConfig(**config_overrides)
        fetcher = ContentFetcher(
            client=origin.client(),
            max_vector_bytes=config.max_vector_bytes,
            strict_vector=config.strict_vector,
        )
        cache = IconCache(store, fetcher=fetcher, config=config, clock=clock)
        return cache

    return _make


@pytest.fixture
def svg_markup():
    return SVG
