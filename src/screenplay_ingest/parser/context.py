"""Mutable state threaded through one parse call.

Every format parser classifies its own tokens and then drives the same
transitions on a ``ParseContext``. The context keeps explicit handles to the
scene and dialogue currently being filled, the ordered character
accumulators and the running counters of the screenplay under construction.
"""

from __future__ import annotations

from screenplay_ingest.config import get_logger
from screenplay_ingest.models import (
    TRANSITION_NOTE,
    OrderedNameSet,
    Screenplay,
    ScreenplayDialogue,
    ScreenplayMetadata,
    ScreenplayNote,
    ScreenplayScene,
)
from screenplay_ingest.utils.screenplay import clean_character_name, count_words

logger = get_logger(__name__)


class ParseContext:
    """Accumulator and state machine for a single document."""

    def __init__(self, source_format: str | None = None) -> None:
        self.screenplay = Screenplay(source_format=source_format)
        self.characters = OrderedNameSet()
        self.scene_characters: list[OrderedNameSet] = []
        self.current_scene: ScreenplayScene | None = None
        self.current_dialogue: ScreenplayDialogue | None = None
        self.ignored_tokens = 0

    @property
    def metadata(self) -> ScreenplayMetadata:
        return self.screenplay.metadata

    def _ignore(self, kind: str, text: str) -> None:
        self.ignored_tokens += 1
        logger.debug("Ignoring out-of-order token", kind=kind, text=text[:60])

    def count_words(self, text: str) -> None:
        """Add the words of a raw text unit to the running total."""
        self.screenplay.total_words += count_words(text)

    def open_scene(self, heading: str) -> ScreenplayScene:
        """Close the open scene and start a new one headed by ``heading``."""
        scene = ScreenplayScene(heading=heading)
        self.screenplay.scenes.append(scene)
        self.scene_characters.append(OrderedNameSet())
        self.current_scene = scene
        self.current_dialogue = None
        return scene

    def add_action(self, text: str) -> None:
        if self.current_scene is None:
            self._ignore("action", text)
            return
        self.current_scene.action.append(text)
        self.screenplay.action_count += 1
        self.current_dialogue = None

    def add_character(self, raw_name: str) -> str:
        """Register a character cue and open a dialogue block for it.

        Returns:
            The cleaned character name
        """
        name = clean_character_name(raw_name)
        if self.current_scene is None:
            self._ignore("character", raw_name)
            self.current_dialogue = None
            return name
        self.scene_characters[-1].add(name)
        self.characters.add(name)
        dialogue = ScreenplayDialogue(character=name)
        self.current_scene.dialogues.append(dialogue)
        self.current_dialogue = dialogue
        return name

    def add_parenthetical(self, text: str) -> None:
        if self.current_dialogue is None:
            self._ignore("parenthetical", text)
            return
        self.current_dialogue.parenthetical = text

    def add_dialogue_line(self, text: str) -> None:
        if self.current_dialogue is None:
            self._ignore("dialogue", text)
            return
        self.current_dialogue.content.append(text)
        self.screenplay.dialogue_count += 1

    def add_transition(self, text: str) -> None:
        if self.current_scene is None:
            self._ignore("transition", text)
            return
        note = ScreenplayNote(type=TRANSITION_NOTE, text=text)
        self.current_scene.notes.append(note)

    def end_dialogue(self) -> None:
        """Freeze the current dialogue block without opening another."""
        self.current_dialogue = None
