"""CLI command implementations."""

from screenplay_ingest.cli.commands.parse import detect_command, parse_command

__all__ = ["detect_command", "parse_command"]
