"""Screenplay format detection and format-hint resolution."""

from __future__ import annotations

import re
from enum import Enum

from screenplay_ingest.config import get_logger
from screenplay_ingest.exceptions import UnsupportedFormatError

logger = get_logger(__name__)


class ScreenplayFormat(str, Enum):
    """Source formats the ingestion pipeline understands."""

    FINAL_DRAFT = "final_draft"
    FOUNTAIN = "fountain"
    CELTX = "celtx"
    WRITERDUET = "writerduet"


FADE_PATTERN = re.compile(r"FADE (IN|OUT)", re.IGNORECASE)

# Explicit hints accepted by ScreenplayParser.parse, including file extensions
FORMAT_HINTS: dict[str, ScreenplayFormat] = {
    "fdx": ScreenplayFormat.FINAL_DRAFT,
    "final_draft": ScreenplayFormat.FINAL_DRAFT,
    "fountain": ScreenplayFormat.FOUNTAIN,
    "spmd": ScreenplayFormat.FOUNTAIN,
    "txt": ScreenplayFormat.FOUNTAIN,
    "celtx": ScreenplayFormat.CELTX,
    "html": ScreenplayFormat.WRITERDUET,
    "htm": ScreenplayFormat.WRITERDUET,
    "writerduet": ScreenplayFormat.WRITERDUET,
}
XML_HINT = "xml"


def _is_celtx(content: str) -> bool:
    return "<celtx:document" in content or (
        "<?xml" in content and "<celtx:" in content
    )


def detect_format(content: str | bytes) -> ScreenplayFormat:
    """Guess the source format of a screenplay from its content.

    Checks run in a fixed priority order and the first match wins, so a
    document satisfying several checks resolves to the earliest one:

    1. a ``<FinalDraft`` root tag
    2. an ``INT.``/``EXT.`` heading or a ``FADE IN``/``FADE OUT`` marker
    3. a Celtx document or namespaced tag
    4. a WriterDuet ``page`` or ``screenplay`` container div

    Anything else, including empty input, is treated as Fountain.

    Args:
        content: Raw screenplay text or bytes

    Returns:
        The detected format
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    if "<FinalDraft" in content:
        detected = ScreenplayFormat.FINAL_DRAFT
    elif "INT." in content or "EXT." in content or FADE_PATTERN.search(content):
        detected = ScreenplayFormat.FOUNTAIN
    elif _is_celtx(content):
        detected = ScreenplayFormat.CELTX
    # exact substrings; single quotes or extra classes fall through to Fountain
    elif '<div class="page"' in content or '<div class="screenplay"' in content:
        detected = ScreenplayFormat.WRITERDUET
    else:
        detected = ScreenplayFormat.FOUNTAIN

    logger.debug("Detected screenplay format", format=detected.value)
    return detected


def resolve_format(hint: str | None, content: str) -> ScreenplayFormat:
    """Turn an optional explicit hint into a concrete format.

    An empty hint falls back to :func:`detect_format`. The generic ``xml``
    hint is narrowed to Celtx or Final Draft by looking at the content.

    Raises:
        UnsupportedFormatError: If the hint names no known format
    """
    if not hint:
        return detect_format(content)

    normalized = hint.strip().lower().lstrip(".")
    if normalized == XML_HINT:
        if _is_celtx(content):
            return ScreenplayFormat.CELTX
        return ScreenplayFormat.FINAL_DRAFT
    try:
        return FORMAT_HINTS[normalized]
    except KeyError:
        raise UnsupportedFormatError(
            hint, supported=[*FORMAT_HINTS, XML_HINT]
        ) from None
