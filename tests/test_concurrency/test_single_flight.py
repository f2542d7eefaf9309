"""Tests for single-flight deduplication."""

import asyncio

import pytest

from iconcache.concurrency.single_flight import SingleFlight


class TestSingleFlight:
    async def test_concurrent_callers_share_result(self):
        flight = SingleFlight()
        calls = 0
        release = asyncio.Event()

        async def work():
            nonlocal calls
            calls += 1
            await release.wait()
            return "done"

        waiters = [asyncio.create_task(flight.do("k", work)) for _ in range(4)]
        await asyncio.sleep(0)
        assert flight.in_flight("k")
        release.set()

        assert await asyncio.gather(*waiters) == ["done"] * 4
        assert calls == 1

    async def test_key_forgotten_after_completion(self):
        flight = SingleFlight()
        calls = 0

        async def work():
            nonlocal calls
            calls += 1
            return calls

        assert await flight.do("k", work) == 1
        await asyncio.sleep(0)
        assert not flight.in_flight("k")
        assert await flight.do("k", work) == 2

    async def test_different_keys_run_separately(self):
        flight = SingleFlight()

        async def work_a():
            return "a"

        async def work_b():
            return "b"

        assert await asyncio.gather(flight.do("a", work_a), flight.do("b", work_b)) == ["a", "b"]

    async def test_exception_propagates_to_all_waiters(self):
        flight = SingleFlight()
        release = asyncio.Event()

        async def work():
            await release.wait()
            raise RuntimeError("failed")

        waiters = [asyncio.create_task(flight.do("k", work)) for _ in range(2)]
        await asyncio.sleep(0)
        release.set()

        results = await asyncio.gather(*waiters, return_exceptions=True)
        assert all(isinstance(r, RuntimeError) for r in results)
        await asyncio.sleep(0)
        assert len(flight) == 0

    async def test_cancelled_waiter_does_not_cancel_others(self):
        flight = SingleFlight()
        release = asyncio.Event()

        async def work():
            await release.wait()
            return "ok"

        first = asyncio.create_task(flight.do("k", work))
        second = asyncio.create_task(flight.do("k", work))
        await asyncio.sleep(0)
        first.cancel()
        release.set()

        with pytest.raises(asyncio.CancelledError):
            await first
        assert await second == "ok"
