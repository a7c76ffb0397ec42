"""Render-ready projection of a screenplay for the web UI."""

from __future__ import annotations

from pydantic import BaseModel, Field

from screenplay_ingest.models import Screenplay, ScreenplayStats


class WebDisplayDialogue(BaseModel):
    """A dialogue block with its content lines joined into one string."""

    character: str
    parenthetical: str | None = None
    content: str


class WebDisplayScene(BaseModel):
    """A scene ready for display."""

    id: str
    heading: str
    action: str
    dialogues: list[WebDisplayDialogue] = Field(default_factory=list)
    characters: list[str] = Field(default_factory=list)


class WebDisplayData(BaseModel):
    """Everything the UI needs to draw a script."""

    metadata: dict[str, str] = Field(default_factory=dict)
    stats: ScreenplayStats
    scenes: list[WebDisplayScene] = Field(default_factory=list)


def scene_id(position: int) -> str:
    """Identifier for the scene at 1-based ``position``."""
    return f"scene-{position}"


def project_web_display(screenplay: Screenplay) -> WebDisplayData:
    """Project a finalized screenplay into the web display structure.

    Action blocks are separated by a blank line and dialogue content lines
    are joined with single spaces. No validation happens here.
    """
    scenes = [
        WebDisplayScene(
            id=scene_id(position),
            heading=scene.heading,
            action="\n\n".join(scene.action),
            dialogues=[
                WebDisplayDialogue(
                    character=dialogue.character,
                    parenthetical=dialogue.parenthetical,
                    content=" ".join(dialogue.content),
                )
                for dialogue in scene.dialogues
            ],
            characters=list(scene.characters),
        )
        for position, scene in enumerate(screenplay.scenes, start=1)
    ]
    return WebDisplayData(
        metadata=screenplay.metadata.to_dict(),
        stats=screenplay.stats,
        scenes=scenes,
    )
