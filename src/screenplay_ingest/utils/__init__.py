"""Utility functions for screenplay ingestion."""

from screenplay_ingest.utils.screenplay import clean_character_name, count_words

__all__ = ["clean_character_name", "count_words"]
