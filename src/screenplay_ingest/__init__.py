"""screenplay-ingest: normalize Final Draft, Fountain, Celtx and WriterDuet scripts.

Raw documents are parsed into one canonical ``Screenplay`` model, from which a
web display structure, an LLM analysis structure and a Fountain export are
projected.
"""

from .config import IngestSettings, get_logger, get_settings
from .exceptions import (
    MarkupAccessorUnavailableError,
    MarkupParseError,
    ParseError,
    ScreenplayIngestError,
    UnsupportedFormatError,
)
from .models import (
    Screenplay,
    ScreenplayDialogue,
    ScreenplayMetadata,
    ScreenplayNote,
    ScreenplayScene,
)
from .parser import ScreenplayFormat, ScreenplayParser, detect_format, parse_screenplay
from .views import export_fountain, project_llm_analysis, project_web_display

__version__ = "0.1.0"

__all__ = [
    "IngestSettings",
    "MarkupAccessorUnavailableError",
    "MarkupParseError",
    "ParseError",
    "Screenplay",
    "ScreenplayDialogue",
    "ScreenplayFormat",
    "ScreenplayIngestError",
    "ScreenplayMetadata",
    "ScreenplayNote",
    "ScreenplayParser",
    "ScreenplayScene",
    "UnsupportedFormatError",
    "__version__",
    "detect_format",
    "export_fountain",
    "get_logger",
    "get_settings",
    "parse_screenplay",
    "project_llm_analysis",
    "project_web_display",
]
