"""Canonical screenplay data model.

Every source format is normalized into these structures. Scenes own their
dialogues and notes; the screenplay owns its scenes. Character names are
accumulated in ``OrderedNameSet`` instances while parsing and written onto the
model as lists, in order of first appearance, when the document is finalized.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

TRANSITION_NOTE = "transition"


class OrderedNameSet:
    """De-duplicating collection of names that remembers first appearance."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: dict[str, None] = dict.fromkeys(names)

    def add(self, name: str) -> bool:
        """Add ``name``; return True when it was not already present."""
        if name in self._names:
            return False
        self._names[name] = None
        return True

    def to_list(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"OrderedNameSet({self.to_list()!r})"


@dataclass
class ScreenplayMetadata:
    """Title-page and document properties. Every field is optional."""

    title: str | None = None
    author: str | None = None
    copyright: str | None = None
    created_date: str | None = None
    modified_date: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    _FIELDS = ("title", "author", "copyright", "created_date", "modified_date")

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under a named field or as an extension key."""
        key = key.strip().lower()
        if key in self._FIELDS:
            setattr(self, key, value)
        else:
            self.extra[key] = value

    def items(self) -> list[tuple[str, str]]:
        """Return populated entries, title and author first."""
        entries = [
            (name, getattr(self, name))
            for name in self._FIELDS
            if getattr(self, name) is not None
        ]
        entries.extend(self.extra.items())
        return entries

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())


@dataclass
class ScreenplayNote:
    """Annotation attached to the scene in which it was found."""

    type: str
    text: str


@dataclass
class ScreenplayDialogue:
    """A character cue with its optional parenthetical and raw content lines."""

    character: str
    parenthetical: str | None = None
    content: list[str] = field(default_factory=list)


@dataclass
class ScreenplayScene:
    """A scene opened by a heading and closed by the next heading."""

    heading: str
    action: list[str] = field(default_factory=list)
    dialogues: list[ScreenplayDialogue] = field(default_factory=list)
    characters: list[str] = field(default_factory=list)
    notes: list[ScreenplayNote] = field(default_factory=list)

    @property
    def slug(self) -> str:
        """Scene identifier; the raw heading text."""
        return self.heading

    @property
    def transitions(self) -> list[str]:
        return [note.text for note in self.notes if note.type == TRANSITION_NOTE]

    def to_dict(self) -> dict[str, Any]:
        return {
            "heading": self.heading,
            "slug": self.slug,
            "action": list(self.action),
            "dialogues": [
                {
                    "character": dialogue.character,
                    "parenthetical": dialogue.parenthetical,
                    "content": list(dialogue.content),
                }
                for dialogue in self.dialogues
            ],
            "characters": list(self.characters),
            "notes": [{"type": note.type, "text": note.text} for note in self.notes],
        }


@dataclass
class ScreenplayStats:
    """Aggregate counts for a finalized screenplay."""

    scene_count: int = 0
    character_count: int = 0
    dialogue_count: int = 0
    action_count: int = 0
    total_words: int = 0
    estimated_pages: int = 0


@dataclass
class Screenplay:
    """Root of the canonical model, built by exactly one parse call."""

    metadata: ScreenplayMetadata = field(default_factory=ScreenplayMetadata)
    scenes: list[ScreenplayScene] = field(default_factory=list)
    characters: list[str] = field(default_factory=list)
    dialogue_count: int = 0
    action_count: int = 0
    total_words: int = 0
    scene_count: int | None = None
    character_count: int | None = None
    estimated_pages: int | None = None
    source_format: str | None = None

    @property
    def is_finalized(self) -> bool:
        return self.scene_count is not None

    @property
    def stats(self) -> ScreenplayStats:
        return ScreenplayStats(
            scene_count=self.scene_count or 0,
            character_count=self.character_count or 0,
            dialogue_count=self.dialogue_count,
            action_count=self.action_count,
            total_words=self.total_words,
            estimated_pages=self.estimated_pages or 0,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the whole model into JSON-ready builtins."""
        return {
            "metadata": self.metadata.to_dict(),
            "scenes": [scene.to_dict() for scene in self.scenes],
            "characters": list(self.characters),
            "dialogue_count": self.dialogue_count,
            "action_count": self.action_count,
            "total_words": self.total_words,
            "scene_count": self.scene_count,
            "character_count": self.character_count,
            "estimated_pages": self.estimated_pages,
            "source_format": self.source_format,
        }
