"""Fountain plain-text parser.

Fountain has no tags, so every trimmed line is classified by pattern and by
position. Classification runs in this order, first match wins:

1. title-page ``Key: value`` lines (a ``Title:`` line near the top opens them)
2. scene headings (``INT.``, ``EXT.``, ``INT/EXT``, ``I/E``)
3. transitions (``CUT TO:``, ``FADE OUT.``, or a line forced with ``>``)
4. character cues: an all-caps name, optionally with an extension such as
   ``(CONT'D)``, but only once the scene already holds an action or dialogue
   block. An all-caps line directly under a heading stays action.
5. parentheticals and dialogue while a dialogue block is open
6. action

A blank line closes the title page and any open dialogue block.
"""

from __future__ import annotations

import re

from screenplay_ingest.config import get_logger
from screenplay_ingest.parser.context import ParseContext
from screenplay_ingest.parser.detector import ScreenplayFormat

logger = get_logger(__name__)

SCENE_HEADING_PATTERN = re.compile(r"^(INT|EXT|INT/EXT|I/E)[.\s].+", re.IGNORECASE)
CHARACTER_PATTERN = re.compile(r"^[A-Z][A-Z0-9\s.,'&-]*(\([A-Z\s.,']*\))?$")
PARENTHETICAL_PATTERN = re.compile(r"^\((.+)\)$")
TRANSITION_PATTERN = re.compile(
    r"^(FADE (TO|IN|OUT)|CUT TO|DISSOLVE TO|SMASH CUT|QUICK CUT|MATCH CUT"
    r"|JUMP CUT|FADE TO BLACK|END CREDITS|THE END)[:.]?$",
    re.IGNORECASE,
)
FORCED_TRANSITION_PREFIX = ">"
CENTERED_SUFFIX = "<"

TITLE_KEY = "Title:"
# A title page must start within the first lines of the document
TITLE_PAGE_WINDOW = 10


class FountainParser:
    """Line-oriented Fountain parser.

    A blank line closes the open dialogue block, as the Fountain grammar
    requires. Older readers skipped blank lines and kept following text in
    the speech; this parser deliberately does not.
    """

    format = ScreenplayFormat.FOUNTAIN

    def parse(self, content: str, context: ParseContext) -> None:
        in_title_page = False
        in_dialogue = False

        for index, raw_line in enumerate(content.split("\n")):
            line = raw_line.strip()

            if not line:
                in_title_page = False
                if in_dialogue:
                    in_dialogue = False
                    context.end_dialogue()
                continue

            context.count_words(line)

            if index < TITLE_PAGE_WINDOW and line.startswith(TITLE_KEY):
                in_title_page = True
                context.metadata.title = line[len(TITLE_KEY) :].strip()
                continue
            if in_title_page:
                if ":" in line:
                    key, _, value = line.partition(":")
                    context.metadata.set(key, value.strip())
                    continue
                in_title_page = False

            if SCENE_HEADING_PATTERN.match(line):
                in_dialogue = False
                context.open_scene(line)
                continue

            transition = self._transition_text(line)
            if transition is not None:
                in_dialogue = False
                context.end_dialogue()
                context.add_transition(transition)
                continue

            if self._is_character_cue(line, context):
                in_dialogue = True
                context.add_character(line)
                continue

            if in_dialogue and PARENTHETICAL_PATTERN.match(line):
                context.add_parenthetical(line)
                continue

            if in_dialogue:
                context.add_dialogue_line(line)
                continue

            context.add_action(line)

        logger.debug(
            "Parsed Fountain document",
            scenes=len(context.screenplay.scenes),
            ignored=context.ignored_tokens,
        )

    @staticmethod
    def _transition_text(line: str) -> str | None:
        """Return the transition text for ``line``, or None if it is not one."""
        if line.startswith(FORCED_TRANSITION_PREFIX) and not line.endswith(
            CENTERED_SUFFIX
        ):
            return line[len(FORCED_TRANSITION_PREFIX) :].strip() or None
        if TRANSITION_PATTERN.match(line):
            return line
        return None

    @staticmethod
    def _is_character_cue(line: str, context: ParseContext) -> bool:
        if not CHARACTER_PATTERN.match(line):
            return False
        scene = context.current_scene
        return scene is None or bool(scene.action or scene.dialogues)
