"""Tests for the parse context state machine and the finalizer."""

import pytest

from screenplay_ingest.models import TRANSITION_NOTE
from screenplay_ingest.parser.context import ParseContext
from screenplay_ingest.parser.finalizer import estimate_pages, finalize_screenplay


@pytest.fixture
def context():
    """Context with one open scene."""
    ctx = ParseContext(source_format="fountain")
    ctx.open_scene("INT. ROOM - DAY")
    return ctx


class TestParseContext:
    """Test the transitions shared by all format parsers."""

    def test_tokens_before_first_scene_are_ignored(self):
        """Test that nothing attaches to the document before a heading."""
        ctx = ParseContext()
        ctx.add_action("Orphan action.")
        ctx.add_character("JOHN")
        ctx.add_parenthetical("(beat)")
        ctx.add_dialogue_line("Hello.")
        ctx.add_transition("CUT TO:")

        assert ctx.screenplay.scenes == []
        assert len(ctx.characters) == 0
        assert ctx.screenplay.action_count == 0
        assert ctx.screenplay.dialogue_count == 0
        assert ctx.ignored_tokens == 5

    def test_open_scene_clears_dialogue(self, context):
        """Test that a new heading closes the open dialogue block."""
        context.add_character("JOHN")
        context.open_scene("EXT. YARD - DAY")
        context.add_dialogue_line("Lost line.")

        assert context.screenplay.dialogue_count == 0
        assert len(context.screenplay.scenes) == 2
        assert context.current_scene.heading == "EXT. YARD - DAY"

    def test_character_opens_dialogue(self, context):
        """Test a cue followed by a parenthetical and two lines."""
        name = context.add_character("JOHN:")
        context.add_parenthetical("(quietly)")
        context.add_dialogue_line("First.")
        context.add_dialogue_line("Second.")

        assert name == "JOHN"
        dialogue = context.current_scene.dialogues[0]
        assert dialogue.character == "JOHN"
        assert dialogue.parenthetical == "(quietly)"
        assert dialogue.content == ["First.", "Second."]
        assert context.screenplay.dialogue_count == 2
        assert "JOHN" in context.characters
        assert "JOHN" in context.scene_characters[-1]

    def test_later_parenthetical_replaces_earlier(self, context):
        """Test that a dialogue block keeps only its last parenthetical."""
        context.add_character("JOHN")
        context.add_parenthetical("(first)")
        context.add_parenthetical("(second)")
        assert context.current_dialogue.parenthetical == "(second)"

    def test_action_freezes_dialogue(self, context):
        """Test that dialogue after action is dropped."""
        context.add_character("JOHN")
        context.add_action("He leaves.")
        context.add_dialogue_line("Nobody hears this.")

        assert context.current_scene.dialogues[0].content == []
        assert context.screenplay.action_count == 1
        assert context.screenplay.dialogue_count == 0

    def test_transition_keeps_dialogue_open(self, context):
        """Test that a transition alone does not end the dialogue block."""
        context.add_character("JOHN")
        context.add_transition("CUT TO:")
        context.add_dialogue_line("Still talking.")

        scene = context.current_scene
        assert scene.notes[0].type == TRANSITION_NOTE
        assert scene.notes[0].text == "CUT TO:"
        assert scene.dialogues[0].content == ["Still talking."]

    def test_end_dialogue(self, context):
        """Test freezing the dialogue block explicitly."""
        context.add_character("JOHN")
        context.end_dialogue()
        context.add_dialogue_line("Dropped.")
        assert context.screenplay.dialogue_count == 0

    def test_repeated_characters_are_deduplicated(self, context):
        """Test that a character is recorded once per scene and document."""
        context.add_character("JOHN")
        context.add_character("MARY")
        context.add_character("JOHN")

        assert context.characters.to_list() == ["JOHN", "MARY"]
        assert context.scene_characters[-1].to_list() == ["JOHN", "MARY"]
        assert len(context.current_scene.dialogues) == 3

    def test_count_words(self):
        """Test that word counting accumulates on the screenplay."""
        ctx = ParseContext()
        ctx.count_words("Three little words")
        ctx.count_words("  ")
        ctx.count_words("one")
        assert ctx.screenplay.total_words == 4


class TestFinalizer:
    """Test finalization and page estimation."""

    @pytest.mark.parametrize(
        ("words", "pages"),
        [(0, 0), (1, 1), (250, 1), (251, 2), (500, 2), (501, 3)],
    )
    def test_estimate_pages(self, words, pages):
        """Test that pages are rounded up at 250 words per page."""
        assert estimate_pages(words) == pages

    def test_estimate_pages_custom_rate(self):
        """Test a non-default words-per-page value."""
        assert estimate_pages(100, words_per_page=30) == 4

    def test_finalize_writes_characters_and_counts(self, context):
        """Test that finalize copies ordered names and derives counts."""
        context.add_character("MARY")
        context.add_character("JOHN")
        context.open_scene("EXT. YARD - DAY")
        context.add_character("JOHN")
        context.count_words("word " * 251)

        screenplay = finalize_screenplay(context)

        assert screenplay.is_finalized
        assert screenplay.characters == ["MARY", "JOHN"]
        assert screenplay.scenes[0].characters == ["MARY", "JOHN"]
        assert screenplay.scenes[1].characters == ["JOHN"]
        assert screenplay.scene_count == 2
        assert screenplay.character_count == 2
        assert screenplay.estimated_pages == 2

    def test_finalize_is_idempotent(self, context):
        """Test that finalizing twice gives the same result."""
        context.add_character("JOHN")
        context.add_dialogue_line("Hi.")
        context.count_words("INT. ROOM - DAY JOHN Hi.")

        first = finalize_screenplay(context).to_dict()
        second = finalize_screenplay(context).to_dict()
        assert first == second

    def test_empty_context(self):
        """Test finalizing a document with no scenes."""
        screenplay = finalize_screenplay(ParseContext())

        assert screenplay.scene_count == 0
        assert screenplay.character_count == 0
        assert screenplay.estimated_pages == 0
        assert screenplay.characters == []
