"""WriterDuet HTML parser."""

from __future__ import annotations

from screenplay_ingest.config import get_logger
from screenplay_ingest.parser.context import ParseContext
from screenplay_ingest.parser.detector import ScreenplayFormat
from screenplay_ingest.parser.markup import HTML, MarkupAccessorRegistry, MarkupNode

logger = get_logger(__name__)

CONTAINER_CLASSES = ("page", "screenplay")
ELEMENT_CLASS = "element"
META_FIELDS = ("author", "description")


class WriterDuetParser:
    """Read ``.element`` blocks inside ``.page``/``.screenplay`` containers.

    The element's class attribute decides the transition. Classes are
    matched as substrings in a fixed order, so ``scene-heading`` is seen as
    a heading before ``action`` or ``character`` are considered.
    """

    format = ScreenplayFormat.WRITERDUET

    def __init__(self, accessors: MarkupAccessorRegistry | None = None) -> None:
        self.accessors = accessors or MarkupAccessorRegistry.default()

    def parse(self, content: str, context: ParseContext) -> None:
        root = self.accessors.get(HTML).parse(content)
        self._extract_metadata(root, context)

        containers = self._containers(root)
        logger.debug("Reading WriterDuet pages", count=len(containers))
        for container in containers:
            for element in container.iter():
                if element.has_class(ELEMENT_CLASS):
                    self._consume(element, context)

    @classmethod
    def _containers(cls, node: MarkupNode) -> list[MarkupNode]:
        """Outermost page containers under ``node``, in document order."""
        containers: list[MarkupNode] = []
        for child in node.children():
            if any(child.has_class(name) for name in CONTAINER_CLASSES):
                containers.append(child)
            else:
                containers.extend(cls._containers(child))
        return containers

    @staticmethod
    def _consume(element: MarkupNode, context: ParseContext) -> None:
        text = element.text.strip()
        if not text:
            return

        context.count_words(text)

        classes = element.get("class") or ""
        if "scene-heading" in classes or "slug" in classes:
            context.open_scene(text)
        elif "action" in classes or "description" in classes:
            context.add_action(text)
        elif "character" in classes:
            context.add_character(text)
        elif "parenthetical" in classes:
            context.add_parenthetical(text)
        elif "dialogue" in classes:
            context.add_dialogue_line(text)
        elif "transition" in classes:
            context.add_transition(text)

    @staticmethod
    def _extract_metadata(root: MarkupNode, context: ParseContext) -> None:
        title = root.find("title")
        if title is not None and title.text.strip():
            context.metadata.title = title.text.strip()

        for meta in root.find_all("meta"):
            name = (meta.get("name") or "").lower()
            value = meta.get("content")
            if name in META_FIELDS and value:
                context.metadata.set(name, value)
