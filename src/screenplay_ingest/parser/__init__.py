"""Multi-format screenplay parsers."""

from __future__ import annotations

from .context import ParseContext
from .detector import ScreenplayFormat, detect_format, resolve_format
from .finalizer import finalize_screenplay
from .markup import (
    HtmlMarkupAccessor,
    MarkupAccessor,
    MarkupAccessorRegistry,
    XmlMarkupAccessor,
)
from .screenplay_parser import ScreenplayParser, parse_screenplay

__all__ = [
    "HtmlMarkupAccessor",
    "MarkupAccessor",
    "MarkupAccessorRegistry",
    "ParseContext",
    "ScreenplayFormat",
    "ScreenplayParser",
    "XmlMarkupAccessor",
    "detect_format",
    "finalize_screenplay",
    "parse_screenplay",
    "resolve_format",
]
