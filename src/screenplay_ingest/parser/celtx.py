"""Celtx XML parser."""

from __future__ import annotations

from screenplay_ingest.config import get_logger
from screenplay_ingest.parser.context import ParseContext
from screenplay_ingest.parser.detector import ScreenplayFormat
from screenplay_ingest.parser.markup import XML, MarkupAccessorRegistry, MarkupNode

logger = get_logger(__name__)


class CeltxParser:
    """Walk the children of the first ``script`` element.

    Element names decide the transition; namespace prefixes are ignored and
    names are matched case-insensitively.
    """

    format = ScreenplayFormat.CELTX

    def __init__(self, accessors: MarkupAccessorRegistry | None = None) -> None:
        self.accessors = accessors or MarkupAccessorRegistry.default()

    def parse(self, content: str, context: ParseContext) -> None:
        root = self.accessors.get(XML).parse(content)
        self._extract_metadata(root, context)

        script = root if root.name == "script" else root.find("script")
        if script is None:
            logger.debug("Celtx document has no script element")
            return

        for element in script.children():
            text = element.text.strip()
            if not text:
                continue

            context.count_words(text)

            kind = element.name.lower()
            if kind in ("scene", "heading"):
                context.open_scene(text)
            elif kind in ("action", "description"):
                context.add_action(text)
            elif kind == "character":
                context.add_character(text)
            elif kind == "parenthetical":
                context.add_parenthetical(text)
            elif kind == "dialogue":
                context.add_dialogue_line(text)
            elif kind == "transition":
                context.add_transition(text)

    @staticmethod
    def _extract_metadata(root: MarkupNode, context: ParseContext) -> None:
        project_info = root.find("projectinfo")
        if project_info is None:
            return
        for field in ("title", "author"):
            node = project_info.find(field)
            if node is not None and node.text.strip():
                context.metadata.set(field, node.text.strip())
