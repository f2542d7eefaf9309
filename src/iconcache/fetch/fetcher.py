"""Async content fetcher — retrieves an asset and classifies it."""

from __future__ import annotations

import logging

import httpx

from iconcache.cache.models import AssetKind, CacheEntry
from iconcache.errors.exceptions import (
    HttpStatusError,
    MalformedVectorError,
    NetworkError,
    TooLargeError,
)
from iconcache.fetch.classifier import (
    declares_vector,
    is_vector_candidate,
    is_well_formed_vector,
    starts_vector_document,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_VECTOR_BYTES = 100_000
DEFAULT_TIMEOUT = 10.0

_ACCEPT = "image/svg+xml, image/*;q=0.8, */*;q=0.5"


class ContentFetcher:
    """Fetches assets from the remote origin.

    Vector markup is read (up to ``max_vector_bytes``) and inlined. Anything
    else becomes a raster reference: the URL is kept and the body is never
    read.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        max_vector_bytes: int = DEFAULT_MAX_VECTOR_BYTES,
        timeout: float = DEFAULT_TIMEOUT,
        strict_vector: bool = False,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"Accept": _ACCEPT},
        )
        self._max_vector_bytes = max_vector_bytes
        self._strict_vector = strict_vector

    async def fetch(self, url: str) -> CacheEntry:
        """GET ``url`` and return a classified entry.

        Raises NetworkError, HttpStatusError, TooLargeError or
        MalformedVectorError.
        """
        try:
            async with self._client.stream("GET", url) as response:
                if not response.is_success:
                    raise HttpStatusError(
                        f"HTTP {response.status_code} for {url}",
                        url=url,
                        http_status=response.status_code,
                    )

                content_type = response.headers.get("content-type")
                if not is_vector_candidate(url, content_type):
                    return _raster_reference(url)

                body = await self._read_limited(response, url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Failed to fetch {url}: {e}", url=url, original=e) from e

        if body is not None:
            text = _decode(body, response)
            if is_well_formed_vector(text):
                return CacheEntry(kind=AssetKind.VECTOR, content=text, byte_size=len(body))

        if self._strict_vector and declares_vector(content_type):
            raise MalformedVectorError(f"Declared SVG without root element: {url}", url=url)

        logger.debug("Not well-formed SVG, keeping reference: %s", url)
        return _raster_reference(url)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _read_limited(self, response: httpx.Response, url: str) -> bytes | None:
        """Read a vector candidate's body up to ``max_vector_bytes``.

        Once the limit is crossed (by Content-Length or by bytes streamed) the
        head of the body decides: SVG markup raises TooLargeError, anything
        else returns None and is kept as a reference.
        """
        declared = response.headers.get("content-length")
        declared_size = int(declared) if declared and declared.isdigit() else 0

        chunks: list[bytes] = []
        size = 0
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
            size += len(chunk)
            if size <= self._max_vector_bytes and declared_size <= self._max_vector_bytes:
                continue
            if not starts_vector_document(b"".join(chunks)):
                logger.debug("Oversized non-SVG body at %s, keeping reference", url)
                return None
            raise TooLargeError(
                f"SVG too large: over {self._max_vector_bytes} bytes",
                url=url,
                size=max(size, declared_size),
                limit=self._max_vector_bytes,
            )
        return b"".join(chunks)


def _raster_reference(url: str) -> CacheEntry:
    return CacheEntry(kind=AssetKind.RASTER_REFERENCE, content=url, byte_size=len(url))


def _decode(body: bytes, response: httpx.Response) -> str:
    try:
        return body.decode(response.charset_encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
