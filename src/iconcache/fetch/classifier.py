"""Classify responses as vector markup or raster references."""

from __future__ import annotations

from urllib.parse import urlsplit

VECTOR_CONTENT_TYPE = "image/svg+xml"
VECTOR_EXTENSIONS = (".svg",)

_OPEN_TAG = "<svg"
_CLOSE_TAG = "</svg>"
_SNIFF_BYTES = 1024


def is_vector_candidate(url: str, content_type: str | None) -> bool:
    """Decide from headers and URL alone whether the body may be vector markup."""
    if content_type and VECTOR_CONTENT_TYPE in content_type.lower():
        return True
    return urlsplit(url).path.lower().endswith(VECTOR_EXTENSIONS)


def declares_vector(content_type: str | None) -> bool:
    return bool(content_type) and VECTOR_CONTENT_TYPE in content_type.lower()


def is_well_formed_vector(text: str) -> bool:
    """Both the opening and closing root tags must be present."""
    lowered = text.lower()
    return _OPEN_TAG in lowered and _CLOSE_TAG in lowered


def starts_vector_document(head: bytes) -> bool:
    """Sniff the first bytes of a body for an SVG root element."""
    return _OPEN_TAG in head[:_SNIFF_BYTES].decode("utf-8", errors="replace").lower()
