"""Tests for character name normalization and word counting."""

import pytest

from screenplay_ingest.utils import clean_character_name, count_words


class TestCleanCharacterName:
    """Test clean_character_name."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("JOHN", "JOHN"),
            ("  MARY  ", "MARY"),
            ("JOHN:", "JOHN"),
            ("JOHN.", "JOHN"),
            ("JOHN-", "JOHN"),
            ("JOHN!!", "JOHN!"),
            ("DR. SMITH", "DR. SMITH"),
        ],
    )
    def test_trailing_punctuation(self, raw, expected):
        """Test that one trailing artifact is removed."""
        assert clean_character_name(raw) == expected

    def test_extension_spacing(self):
        """Test that whitespace before an extension collapses to one space."""
        assert clean_character_name("BOB   (V.O.) ") == "BOB (V.O."

    def test_closing_paren_is_stripped(self):
        """Test that a closing parenthesis counts as trailing punctuation."""
        assert clean_character_name("JOHN (O.S.)") == "JOHN (O.S."

    def test_case_is_preserved(self):
        """Test that differently cased names stay distinct."""
        assert clean_character_name("John") == "John"
        assert clean_character_name("John") != clean_character_name("JOHN")


class TestCountWords:
    """Test count_words."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", 0),
            ("   ", 0),
            ("one", 1),
            ("INT. HOUSE - DAY", 4),
            ("  spaced\tout\nwords  ", 3),
        ],
    )
    def test_count_words(self, text, expected):
        """Test whitespace-separated word counts."""
        assert count_words(text) == expected
