"""Screenplay text utilities shared by the format parsers and views."""

from __future__ import annotations

import re

# One trailing formatting artifact: . , / # ! $ % ^ & * ; : { } = - _ ` ~ ( )
TRAILING_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]$")
SPACE_BEFORE_PAREN = re.compile(r"\s+\(")
WORD_SPLIT = re.compile(r"\s+")


def clean_character_name(name: str) -> str:
    """Normalize a raw character cue into a character identity.

    Surrounding whitespace is trimmed, a single trailing punctuation artifact
    is dropped and whitespace before an extension such as ``(O.S.)`` is
    collapsed to one space. Case is preserved, so ``JOHN`` and ``John`` stay
    distinct.

    Args:
        name: Character cue text as it appeared in the source

    Returns:
        Cleaned character name
    """
    cleaned = TRAILING_PUNCTUATION.sub("", name.strip(), count=1)
    return SPACE_BEFORE_PAREN.sub(" (", cleaned)


def count_words(text: str) -> int:
    """Count whitespace-separated words in ``text``."""
    return len([word for word in WORD_SPLIT.split(text) if word])
