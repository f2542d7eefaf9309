"""Concurrency — batch preloading and optional single-flight deduplication."""

from iconcache.concurrency.pool import PreloadPool
from iconcache.concurrency.single_flight import SingleFlight

__all__ = ["PreloadPool", "SingleFlight"]
