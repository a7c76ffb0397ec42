"""Best-effort export of the canonical model back to Fountain text."""

from __future__ import annotations

from screenplay_ingest.models import TRANSITION_NOTE, Screenplay


def _metadata_key(key: str) -> str:
    return key[:1].upper() + key[1:]


def export_fountain(screenplay: Screenplay) -> str:
    """Serialize a screenplay as Fountain.

    Title and author lead the title page, followed by the remaining metadata
    keys with their first letter capitalized. Each scene is written as its
    heading, its action blocks, its dialogue blocks and then its transitions
    (forced with ``>``). Formatting that the model does not carry is lost,
    and action is no longer interleaved with dialogue.
    """
    lines: list[str] = []

    metadata = screenplay.metadata
    if metadata.title:
        lines.append(f"Title: {metadata.title}")
    if metadata.author:
        lines.append(f"Author: {metadata.author}")
    for key, value in metadata.items():
        if key not in ("title", "author"):
            lines.append(f"{_metadata_key(key)}: {value}")
    lines.append("")

    for scene in screenplay.scenes:
        lines.extend([scene.heading, ""])

        for action in scene.action:
            lines.extend([action, ""])

        for dialogue in scene.dialogues:
            lines.append(dialogue.character)
            if dialogue.parenthetical:
                lines.append(dialogue.parenthetical)
            lines.extend(dialogue.content)
            lines.append("")

        for note in scene.notes:
            if note.type == TRANSITION_NOTE:
                lines.extend([f"> {note.text}", ""])

    return "\n".join(lines) + "\n"
