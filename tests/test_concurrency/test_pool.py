"""Tests for the preload pool."""

import asyncio

from iconcache.cache.models import AssetKind, CacheEntry
from iconcache.concurrency.pool import PreloadPool


def _entry(url: str) -> CacheEntry:
    return CacheEntry(kind=AssetKind.RASTER_REFERENCE, content=url, byte_size=len(url))


class TestPreloadPool:
    async def test_all_succeed(self):
        async def load(url):
            return _entry(url)

        outcomes = await PreloadPool().run(load, ["a", "b", "c"])

        assert [o.url for o in outcomes] == ["a", "b", "c"]
        assert all(o.ok for o in outcomes)

    async def test_none_result_is_failure(self):
        async def load(url):
            return None if url == "b" else _entry(url)

        outcomes = await PreloadPool().run(load, ["a", "b", "c"])

        assert [o.ok for o in outcomes] == [True, False, True]
        assert outcomes[1].error == "not available"

    async def test_exception_is_isolated(self):
        """A raising loader must not abort the batch."""
        async def load(url):
            if url == "bad":
                raise ValueError("boom")
            return _entry(url)

        outcomes = await PreloadPool().run(load, ["good", "bad", "good2"])

        assert len(outcomes) == 3
        assert outcomes[1].error == "boom"
        assert outcomes[0].ok and outcomes[2].ok

    async def test_respects_max_concurrency(self):
        concurrent = 0
        max_concurrent = 0

        async def load(url):
            nonlocal concurrent, max_concurrent
            concurrent += 1
            max_concurrent = max(max_concurrent, concurrent)
            await asyncio.sleep(0.01)
            concurrent -= 1
            return _entry(url)

        await PreloadPool(max_concurrency=2).run(load, [str(i) for i in range(8)])

        assert max_concurrent <= 2

    async def test_runs_concurrently(self):
        started = asyncio.Event()
        order = []

        async def load(url):
            if url == "slow":
                await started.wait()
            else:
                started.set()
            order.append(url)
            return _entry(url)

        await PreloadPool().run(load, ["slow", "fast"])

        assert order == ["fast", "slow"]

    async def test_empty(self):
        async def load(url):
            return _entry(url)

        assert await PreloadPool().run(load, []) == []
