"""Interface shared by the format parsers."""

from __future__ import annotations

from typing import Protocol

from screenplay_ingest.parser.context import ParseContext
from screenplay_ingest.parser.detector import ScreenplayFormat


class FormatParser(Protocol):
    """Consumes one source format and drives a ``ParseContext``."""

    format: ScreenplayFormat

    def parse(self, content: str, context: ParseContext) -> None:
        """Read ``content`` token by token into ``context``.

        Args:
            content: Decoded document text
            context: Fresh context owned by the current parse call
        """
        ...
