"""Entry point that turns raw screenplay content into the canonical model."""

from __future__ import annotations

from screenplay_ingest.config import IngestSettings, get_logger, get_settings
from screenplay_ingest.exceptions import ParseError
from screenplay_ingest.models import Screenplay
from screenplay_ingest.parser.base import FormatParser
from screenplay_ingest.parser.celtx import CeltxParser
from screenplay_ingest.parser.context import ParseContext
from screenplay_ingest.parser.detector import ScreenplayFormat, resolve_format
from screenplay_ingest.parser.final_draft import FinalDraftParser
from screenplay_ingest.parser.finalizer import finalize_screenplay
from screenplay_ingest.parser.fountain import FountainParser
from screenplay_ingest.parser.markup import MarkupAccessorRegistry
from screenplay_ingest.parser.writerduet import WriterDuetParser
from screenplay_ingest.views.fountain_export import export_fountain
from screenplay_ingest.views.llm_analysis import LLMAnalysisData, project_llm_analysis
from screenplay_ingest.views.web_display import WebDisplayData, project_web_display

logger = get_logger(__name__)


class ScreenplayParser:
    """Parse Final Draft, Fountain, Celtx and WriterDuet documents.

    The parser object holds configuration only. Each :meth:`parse` call
    builds its own :class:`ParseContext`, so one instance can serve
    concurrent calls from several threads. The most recent result is kept on
    ``screenplay`` for the view helpers.
    """

    def __init__(
        self,
        settings: IngestSettings | None = None,
        accessors: MarkupAccessorRegistry | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            settings: Settings to use instead of the global ones
            accessors: Markup accessors for the XML and HTML formats
        """
        self.settings = settings or get_settings()
        self.accessors = accessors or MarkupAccessorRegistry.default()
        self.parsers: dict[ScreenplayFormat, FormatParser] = {
            ScreenplayFormat.FINAL_DRAFT: FinalDraftParser(self.accessors),
            ScreenplayFormat.FOUNTAIN: FountainParser(),
            ScreenplayFormat.CELTX: CeltxParser(self.accessors),
            ScreenplayFormat.WRITERDUET: WriterDuetParser(self.accessors),
        }
        self.screenplay: Screenplay | None = None

    def decode(self, content: str | bytes) -> str:
        """Decode raw bytes as UTF-8, falling back to the configured encoding."""
        if isinstance(content, str):
            text = content
        else:
            try:
                text = content.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug(
                    "Content is not UTF-8, using fallback encoding",
                    encoding=self.settings.fallback_encoding,
                )
                text = content.decode(self.settings.fallback_encoding)
        # a UTF-8 byte order mark would otherwise hide the XML prolog
        return text.removeprefix("\ufeff")

    def parse(
        self, content: str | bytes, format_hint: str | None = None
    ) -> Screenplay:
        """Parse a complete screenplay document.

        Args:
            content: Document text or raw bytes
            format_hint: Optional ``fdx``, ``fountain``, ``celtx``, ``xml`` or
                ``html`` (file extensions are accepted too). Detected from the
                content when omitted.

        Returns:
            The finalized screenplay

        Raises:
            UnsupportedFormatError: If ``format_hint`` names no known format
            MarkupParseError: If an XML document is malformed
            MarkupAccessorUnavailableError: If no accessor serves the markup kind
        """
        text = self.decode(content)
        source_format = resolve_format(format_hint, text)
        parser = self.parsers[source_format]

        context = ParseContext(source_format=source_format.value)
        parser.parse(text, context)
        screenplay = finalize_screenplay(context, self.settings.words_per_page)

        logger.info(
            "Parsed screenplay",
            format=source_format.value,
            scenes=screenplay.scene_count,
            characters=screenplay.character_count,
            words=screenplay.total_words,
        )
        self.screenplay = screenplay
        return screenplay

    def _require_screenplay(self) -> Screenplay:
        if self.screenplay is None:
            raise ParseError(
                message="No screenplay has been parsed yet",
                hint="Call parse() before requesting a view.",
            )
        return self.screenplay

    def web_display(self) -> WebDisplayData:
        """Web rendering structure for the last parsed screenplay."""
        return project_web_display(self._require_screenplay())

    def llm_analysis(self) -> LLMAnalysisData:
        """LLM analysis structure for the last parsed screenplay."""
        return project_llm_analysis(self._require_screenplay())

    def export_fountain(self) -> str:
        """Fountain text for the last parsed screenplay."""
        return export_fountain(self._require_screenplay())


def parse_screenplay(
    content: str | bytes,
    format_hint: str | None = None,
    settings: IngestSettings | None = None,
) -> Screenplay:
    """Parse ``content`` with a throwaway :class:`ScreenplayParser`."""
    return ScreenplayParser(settings=settings).parse(content, format_hint)
