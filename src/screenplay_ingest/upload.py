"""Adapter between the upload layer and the parser.

The storage layer hands over a file name and its bytes. The result carries
per-scene text blocks and character profiles in the shape the feedback
collaborator consumes.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from pydantic import BaseModel, Field

from screenplay_ingest.config import IngestSettings, get_logger
from screenplay_ingest.exceptions import ParseError, ScreenplayIngestError
from screenplay_ingest.models import ScreenplayScene
from screenplay_ingest.parser.detector import FORMAT_HINTS, XML_HINT, ScreenplayFormat
from screenplay_ingest.parser.final_draft import (
    ACTION,
    CHARACTER,
    DIALOGUE,
    PARENTHETICAL,
    SCENE_HEADING,
    TRANSITION,
    paragraph_text,
)
from screenplay_ingest.parser.markup import XML, MarkupAccessorRegistry
from screenplay_ingest.parser.screenplay_parser import ScreenplayParser
from screenplay_ingest.utils.screenplay import clean_character_name
from screenplay_ingest.views.llm_analysis import project_llm_analysis

logger = get_logger(__name__)

DEFAULT_UPLOAD_TYPE = "txt"
SCENE_HEADING_PREFIX = re.compile(r"^(INT\.|EXT\.|EST\.|INT/EXT\.)")
MAX_CUE_LENGTH = 40


class UploadMetadata(BaseModel):
    title: str | None = None
    author: str | None = None
    upload_type: str = DEFAULT_UPLOAD_TYPE


class UploadScene(BaseModel):
    heading: str
    content: str
    characters: list[str] = Field(default_factory=list)


class CharacterProfile(BaseModel):
    """Starting profile for a character, later enriched by mentor feedback."""

    appearances: int = 0
    dialogue_count: int = 0
    scenes_present: list[int] = Field(default_factory=list)
    notes: str = ""


class UploadResult(BaseModel):
    metadata: UploadMetadata
    scenes: list[UploadScene] = Field(default_factory=list)
    characters: dict[str, CharacterProfile] = Field(default_factory=dict)


def scene_content(scene: ScreenplayScene) -> str:
    """Flatten a scene into text: action first, then each dialogue block."""
    content = "\n\n".join(scene.action)
    for dialogue in scene.dialogues:
        block = [dialogue.character.upper()]
        if dialogue.parenthetical:
            block.append(dialogue.parenthetical)
        block.extend(dialogue.content)
        content += "\n\n" + "\n".join(block)
    return content.strip()


def extract_characters_from_scene(text: str) -> list[str]:
    """Guess character cues in flattened scene text.

    Any short all-caps line that is not a scene heading counts. Names are
    returned once each, in order of first appearance.
    """
    characters: dict[str, None] = {}
    for line in text.split("\n"):
        candidate = line.strip()
        if (
            candidate
            and candidate == candidate.upper()
            and len(candidate) < MAX_CUE_LENGTH
            and not SCENE_HEADING_PREFIX.match(candidate)
        ):
            characters.setdefault(candidate, None)
    return list(characters)


def final_draft_scenes(
    content: str, accessors: MarkupAccessorRegistry | None = None
) -> list[UploadScene]:
    """Rebuild Final Draft scenes with action and dialogue in document order.

    Headings, cues and transitions are upper-cased. A blank line separates
    action from a following cue, dialogue from following action, and precedes
    each transition. Paragraphs before the first heading are dropped.

    Args:
        content: FDX document text
        accessors: Markup accessors providing the XML reader

    Returns:
        One upload scene per scene heading
    """
    root = (accessors or MarkupAccessorRegistry.default()).get(XML).parse(content)

    scenes: list[UploadScene] = []
    lines: list[str] = []
    scene: UploadScene | None = None
    previous: str | None = None

    for paragraph in root.find_all("Paragraph"):
        text = paragraph_text(paragraph)
        if not text:
            continue

        kind = paragraph.get("Type")
        if kind == SCENE_HEADING:
            if scene is not None:
                scene.content = "\n".join(lines)
                scenes.append(scene)
            scene = UploadScene(heading=text.upper(), content="")
            lines = []
            previous = None
            continue
        if scene is None:
            continue

        if kind == ACTION:
            if previous in (DIALOGUE, PARENTHETICAL):
                lines.append("")
            lines.append(text)
        elif kind == CHARACTER:
            if previous == ACTION:
                lines.append("")
            lines.append(text.upper())
            name = clean_character_name(text.upper())
            if name not in scene.characters:
                scene.characters.append(name)
        elif kind in (PARENTHETICAL, DIALOGUE):
            lines.append(text)
        elif kind == TRANSITION:
            lines.extend(["", text.upper()])
        else:
            continue
        previous = kind

    if scene is not None:
        scene.content = "\n".join(lines)
        scenes.append(scene)
    return scenes


def _upload_type(filename: str) -> str:
    return PurePath(filename).suffix.lower().lstrip(".")


def parse_upload(
    filename: str,
    data: str | bytes,
    settings: IngestSettings | None = None,
) -> UploadResult:
    """Parse an uploaded screenplay file.

    The extension selects the format when it is a known one; anything else
    is left to content detection. Final Draft scenes are rebuilt from the
    XML so that action and dialogue keep their document order.

    Args:
        filename: Name of the uploaded file
        data: File contents
        settings: Optional settings for the parser

    Returns:
        Upload result with metadata, flattened scenes and character profiles

    Raises:
        ParseError: If the document cannot be parsed, wrapping the cause
    """
    upload_type = _upload_type(filename)
    known = upload_type in FORMAT_HINTS or upload_type == XML_HINT
    hint = upload_type if known else None

    parser = ScreenplayParser(settings=settings)
    try:
        text = parser.decode(data)
        screenplay = parser.parse(text, hint)
    except ScreenplayIngestError as e:
        logger.error("Failed to parse upload", filename=filename, error=e.message)
        raise ParseError(
            message=f"Failed to parse screenplay: {e.message}",
            hint=e.hint,
            details={"file": filename, **(e.details or {})},
        ) from e

    analysis = project_llm_analysis(screenplay)
    characters = {
        name: CharacterProfile(
            appearances=profile.appearances,
            dialogue_count=profile.dialogue_count,
            scenes_present=profile.scenes_present,
            notes=(
                f"Appears in {profile.appearances} scenes with "
                f"{profile.dialogue_count} lines of dialogue"
            ),
        )
        for name, profile in analysis.character_analysis.items()
    }

    if screenplay.source_format == ScreenplayFormat.FINAL_DRAFT.value:
        scenes = final_draft_scenes(text, parser.accessors)
    else:
        scenes = [
            UploadScene(
                heading=scene.heading,
                content=scene_content(scene),
                characters=list(scene.characters),
            )
            for scene in screenplay.scenes
        ]

    return UploadResult(
        metadata=UploadMetadata(
            title=screenplay.metadata.title or PurePath(filename).stem,
            author=screenplay.metadata.author,
            upload_type=upload_type or DEFAULT_UPLOAD_TYPE,
        ),
        scenes=scenes,
        characters=characters,
    )
