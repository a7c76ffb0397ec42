"""Final Draft (FDX) parser."""

from __future__ import annotations

from screenplay_ingest.config import get_logger
from screenplay_ingest.parser.context import ParseContext
from screenplay_ingest.parser.detector import ScreenplayFormat
from screenplay_ingest.parser.markup import XML, MarkupAccessorRegistry, MarkupNode

logger = get_logger(__name__)

SCENE_HEADING = "Scene Heading"
ACTION = "Action"
CHARACTER = "Character"
PARENTHETICAL = "Parenthetical"
DIALOGUE = "Dialogue"
TRANSITION = "Transition"

TITLE_PAGE_FIELDS = {"Title": "title", "Author": "author", "Copyright": "copyright"}


def paragraph_text(paragraph: MarkupNode) -> str:
    """Join the ``Text`` runs of an FDX paragraph with a space."""
    return " ".join(run.text for run in paragraph.find_all("Text")).strip()


class FinalDraftParser:
    """Walk the ``Paragraph`` elements of an FDX document in order.

    Each paragraph's ``Type`` attribute selects the transition; the paragraph
    text is its ``Text`` runs joined with a space. Paragraph types with no
    counterpart in the model (``Shot``, ``General``...) only add words.
    """

    format = ScreenplayFormat.FINAL_DRAFT

    def __init__(self, accessors: MarkupAccessorRegistry | None = None) -> None:
        self.accessors = accessors or MarkupAccessorRegistry.default()

    def parse(self, content: str, context: ParseContext) -> None:
        root = self.accessors.get(XML).parse(content)
        self._extract_metadata(root, context)

        paragraphs = root.find_all("Paragraph")
        logger.debug("Reading Final Draft paragraphs", count=len(paragraphs))
        for paragraph in paragraphs:
            text = paragraph_text(paragraph)
            if not text:
                continue

            context.count_words(text)

            kind = paragraph.get("Type")
            if kind == SCENE_HEADING:
                context.open_scene(text)
            elif kind == ACTION:
                context.add_action(text)
            elif kind == CHARACTER:
                context.add_character(text)
            elif kind == PARENTHETICAL:
                context.add_parenthetical(text)
            elif kind == DIALOGUE:
                context.add_dialogue_line(text)
            elif kind == TRANSITION:
                context.add_transition(text)

    def _extract_metadata(self, root: MarkupNode, context: ParseContext) -> None:
        """Read the title page and document dates."""
        title_page = root.find("TitlePage")
        if title_page is not None:
            for entry in title_page.find_all("Content"):
                kind = entry.get("Type")
                if kind:
                    key = TITLE_PAGE_FIELDS.get(kind, kind.lower())
                    context.metadata.set(key, entry.text.strip())

        document = root if root.name == "Document" else root.find("Document")
        if document is not None:
            created = document.get("CreatedDate")
            modified = document.get("ModifiedDate")
            if created:
                context.metadata.created_date = created
            if modified:
                context.metadata.modified_date = modified
