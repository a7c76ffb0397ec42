"""Turn a filled parse context into a finished screenplay."""

from __future__ import annotations

import math

from screenplay_ingest.models import Screenplay
from screenplay_ingest.parser.context import ParseContext

# Standard screenplay approximation
WORDS_PER_PAGE = 250


def estimate_pages(total_words: int, words_per_page: int = WORDS_PER_PAGE) -> int:
    """Pages needed for ``total_words``, rounded up."""
    return math.ceil(total_words / words_per_page)


def finalize_screenplay(
    context: ParseContext, words_per_page: int = WORDS_PER_PAGE
) -> Screenplay:
    """Write ordered character lists and aggregate statistics onto the model.

    Character accumulators are copied onto the document and each scene in
    order of first appearance. The running counters are read, never changed,
    so finalizing the same context again gives the same result.

    Args:
        context: Context the format parser has finished filling
        words_per_page: Words per page for the page estimate

    Returns:
        The finalized screenplay
    """
    screenplay = context.screenplay
    screenplay.characters = context.characters.to_list()
    for scene, names in zip(screenplay.scenes, context.scene_characters, strict=True):
        scene.characters = names.to_list()

    screenplay.scene_count = len(screenplay.scenes)
    screenplay.character_count = len(screenplay.characters)
    screenplay.estimated_pages = estimate_pages(screenplay.total_words, words_per_page)
    return screenplay
