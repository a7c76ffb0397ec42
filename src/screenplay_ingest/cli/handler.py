"""Shared error handling and JSON output for CLI commands."""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console

from screenplay_ingest.config import get_logger
from screenplay_ingest.exceptions import ScreenplayIngestError

logger = get_logger(__name__)


def to_json(data: Any) -> str:
    """Serialize pydantic models, model dicts and builtins as indented JSON."""
    if hasattr(data, "model_dump"):
        data = data.model_dump()
    elif hasattr(data, "to_dict"):
        data = data.to_dict()
    return json.dumps(data, default=str, indent=2)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Report ``error`` and exit with ``exit_code``.

        Args:
            error: Exception to report
            json_output: Emit a JSON error document instead of rich text
            exit_code: Exit code to use
        """
        message = str(error)
        hint = None
        if isinstance(error, ScreenplayIngestError):
            message = error.message
            hint = error.hint
        logger.error("Command failed", error=message)

        if json_output:
            response: dict[str, Any] = {
                "success": False,
                "error": message,
                "code": exit_code,
            }
            if hint:
                response["hint"] = hint
            print(json.dumps(response, indent=2))
        else:
            self.console.print(f"[red]Error: {message}[/red]")
            if hint:
                self.console.print(f"[yellow]Hint: {hint}[/yellow]")

        raise typer.Exit(exit_code)
