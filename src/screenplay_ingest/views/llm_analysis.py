"""Projection of a screenplay into context for the AI mentor pipeline.

Downstream prompt builders match on ``dialogue_to_action_ratio`` being either
a two-decimal number string or the literal ``"Infinity"``; keep both forms.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from screenplay_ingest.models import Screenplay, ScreenplayScene
from screenplay_ingest.utils.screenplay import count_words
from screenplay_ingest.views.web_display import scene_id

INFINITE_RATIO = "Infinity"


class LLMAnalysisStats(BaseModel):
    """Document statistics plus the average scene length."""

    scene_count: int
    character_count: int
    dialogue_count: int
    action_count: int
    total_words: int
    estimated_pages: int
    average_scene_length: str


class CharacterAnalysis(BaseModel):
    """How often and where a character appears."""

    appearances: int
    dialogue_count: int
    scenes_present: list[int] = Field(default_factory=list)


class SceneStats(BaseModel):
    """Word balance of a scene."""

    dialogue_words: int
    action_words: int
    dialogue_to_action_ratio: str


class SceneAnalysis(BaseModel):
    """Per-scene analysis entry."""

    scene_number: int
    heading: str
    characters: list[str]
    action_summary: str
    dialogue_count: int
    stats: SceneStats


class StructureScene(BaseModel):
    """Lightweight outline entry for a scene."""

    id: str
    heading: str
    characters: list[str]
    action_count: int
    dialogue_count: int


class ScreenplayStructure(BaseModel):
    scenes: list[StructureScene] = Field(default_factory=list)


class LLMAnalysisData(BaseModel):
    """Structured context that accompanies feedback prompts."""

    metadata: dict[str, str] = Field(default_factory=dict)
    stats: LLMAnalysisStats
    character_analysis: dict[str, CharacterAnalysis] = Field(default_factory=dict)
    scene_analysis: list[SceneAnalysis] = Field(default_factory=list)
    structure: ScreenplayStructure
    full_content: dict[str, Any] = Field(default_factory=dict)


def format_ratio(dialogue_words: int, action_words: int) -> str:
    """Dialogue-to-action ratio with two decimals, or ``"Infinity"``."""
    if action_words == 0:
        return INFINITE_RATIO
    return f"{dialogue_words / action_words:.2f}"


def _scene_stats(scene: ScreenplayScene) -> SceneStats:
    dialogue_words = sum(
        count_words(" ".join(dialogue.content)) for dialogue in scene.dialogues
    )
    action_words = sum(count_words(action) for action in scene.action)
    return SceneStats(
        dialogue_words=dialogue_words,
        action_words=action_words,
        dialogue_to_action_ratio=format_ratio(dialogue_words, action_words),
    )


def _character_analysis(screenplay: Screenplay) -> dict[str, CharacterAnalysis]:
    analysis: dict[str, CharacterAnalysis] = {}
    for character in screenplay.characters:
        scenes_present = [
            number
            for number, scene in enumerate(screenplay.scenes, start=1)
            if character in scene.characters
        ]
        dialogue_count = sum(
            1
            for scene in screenplay.scenes
            for dialogue in scene.dialogues
            if dialogue.character == character
        )
        analysis[character] = CharacterAnalysis(
            appearances=len(scenes_present),
            dialogue_count=dialogue_count,
            scenes_present=scenes_present,
        )
    return analysis


def project_llm_analysis(screenplay: Screenplay) -> LLMAnalysisData:
    """Project a finalized screenplay into the LLM analysis structure.

    ``scenes_present`` holds the real 1-based scene numbers a character
    appears in.
    """
    stats = screenplay.stats
    average = (
        f"{stats.total_words / stats.scene_count:.2f}" if stats.scene_count else "0"
    )

    scene_analysis = [
        SceneAnalysis(
            scene_number=number,
            heading=scene.heading,
            characters=list(scene.characters),
            action_summary=" ".join(scene.action),
            dialogue_count=len(scene.dialogues),
            stats=_scene_stats(scene),
        )
        for number, scene in enumerate(screenplay.scenes, start=1)
    ]

    structure = ScreenplayStructure(
        scenes=[
            StructureScene(
                id=scene_id(number),
                heading=scene.heading,
                characters=list(scene.characters),
                action_count=len(scene.action),
                dialogue_count=len(scene.dialogues),
            )
            for number, scene in enumerate(screenplay.scenes, start=1)
        ]
    )

    return LLMAnalysisData(
        metadata=screenplay.metadata.to_dict(),
        stats=LLMAnalysisStats(
            scene_count=stats.scene_count,
            character_count=stats.character_count,
            dialogue_count=stats.dialogue_count,
            action_count=stats.action_count,
            total_words=stats.total_words,
            estimated_pages=stats.estimated_pages,
            average_scene_length=average,
        ),
        character_analysis=_character_analysis(screenplay),
        scene_analysis=scene_analysis,
        structure=structure,
        full_content=screenplay.to_dict(),
    )
