"""Bounded async fan-out for batch preloading."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from iconcache.cache.models import CacheEntry, PreloadOutcome

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 16


class PreloadPool:
    """Runs a loader over many URLs concurrently, isolating each failure.

    A semaphore caps how many loads are in flight at once.
    """

    def __init__(self, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        self._max_concurrency = max(1, max_concurrency)

    async def run(
        self,
        load_fn: Callable[[str], Awaitable[CacheEntry | None]],
        urls: list[str],
    ) -> list[PreloadOutcome]:
        """Load every URL and return one outcome per URL, in input order."""
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def worker(url: str) -> CacheEntry | None:
            async with semaphore:
                return await load_fn(url)

        results = await asyncio.gather(*(worker(u) for u in urls), return_exceptions=True)

        outcomes: list[PreloadOutcome] = []
        for url, result in zip(urls, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("Preload of %s failed: %s", url, result)
                outcomes.append(PreloadOutcome(url=url, error=str(result) or type(result).__name__))
            elif result is None:
                outcomes.append(PreloadOutcome(url=url, error="not available"))
            else:
                outcomes.append(PreloadOutcome(url=url, entry=result))

        succeeded = sum(1 for o in outcomes if o.ok)
        logger.info("Preloaded %d/%d icons", succeeded, len(urls))
        return outcomes
