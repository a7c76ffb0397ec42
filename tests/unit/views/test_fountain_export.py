"""Tests for the Fountain export."""

from screenplay_ingest.models import Screenplay
from screenplay_ingest.parser import parse_screenplay
from screenplay_ingest.views.fountain_export import export_fountain

ROUND_TRIP_SCRIPT = """Title: Round Trip
Author: Robin Vale
Draft date: March

INT. LAB - NIGHT

Beakers bubble.

DOC
(muttering)
Almost there.
Just one more.

IGOR
Master?

CUT TO:

EXT. ROOF - NIGHT

Lightning strikes.

DOC
It's alive!
"""


class TestExportFountain:
    """Test the Fountain serializer."""

    def test_title_page(self, fountain_text):
        """Test that title and author lead the other metadata keys."""
        exported = export_fountain(parse_screenplay(fountain_text))

        assert exported.startswith(
            "Title: The Last Draft\n"
            "Author: Jane Doe\n"
            "Credit: Written by\n"
            "Draft date: 2024-01-01\n"
            "\n"
        )

    def test_scene_layout(self, fountain_text):
        """Test heading, action, dialogue and forced transitions."""
        exported = export_fountain(parse_screenplay(fountain_text))

        assert (
            "INT. COFFEE SHOP - DAY\n\n"
            "A small, busy cafe.\n\n"
            "Sarah sits down.\n\n"
            "SARAH\n(nervous)\nIs this seat taken?\n\n"
            "JOHN (O.S.\nGo ahead.\n\n"
            "> CUT TO:\n\n"
            "EXT. STREET - NIGHT\n"
        ) in exported
        assert exported.endswith("> FADE OUT.\n\n")

    def test_empty_screenplay(self):
        """Test exporting a model with no metadata or scenes."""
        assert export_fountain(Screenplay()) == "\n"

    def test_round_trip_structure(self):
        """Test that re-parsing the export keeps scenes, dialogue and notes."""
        source = parse_screenplay(ROUND_TRIP_SCRIPT)
        reparsed = parse_screenplay(export_fountain(source))

        assert reparsed.metadata.to_dict() == source.metadata.to_dict()
        assert reparsed.characters == source.characters
        assert reparsed.dialogue_count == source.dialogue_count
        assert reparsed.action_count == source.action_count
        for before, after in zip(source.scenes, reparsed.scenes, strict=True):
            assert after.heading == before.heading
            assert after.action == before.action
            assert after.transitions == before.transitions
            assert [
                (d.character, d.parenthetical, d.content) for d in after.dialogues
            ] == [(d.character, d.parenthetical, d.content) for d in before.dialogues]

    def test_round_trip_minimal_scene(self):
        """Test re-parsing the export of a one-scene script."""
        source = parse_screenplay(
            "INT. HOUSE - DAY\n\nJohn walks in.\n\nJOHN\nHello there."
        )
        reparsed = parse_screenplay(export_fountain(source))

        (scene,) = reparsed.scenes
        assert scene.heading == "INT. HOUSE - DAY"
        assert scene.action == ["John walks in."]
        assert [(d.character, d.content) for d in scene.dialogues] == [
            ("JOHN", ["Hello there."])
        ]
        assert reparsed.characters == source.characters == ["JOHN"]
