"""Parse and detect commands."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from screenplay_ingest.cli.handler import CLIHandler, to_json
from screenplay_ingest.config import get_settings
from screenplay_ingest.models import Screenplay
from screenplay_ingest.parser import ScreenplayParser, detect_format
from screenplay_ingest.parser.detector import FORMAT_HINTS, XML_HINT

console = Console()


class View(str, Enum):
    """Output views of the parse command."""

    CANONICAL = "canonical"
    WEB = "web"
    LLM = "llm"
    FOUNTAIN = "fountain"


def _hint_from_path(path: Path) -> str | None:
    suffix = path.suffix.lower().lstrip(".")
    if suffix in FORMAT_HINTS or suffix == XML_HINT:
        return suffix
    return None


def _print_summary(screenplay: Screenplay, path: Path) -> None:
    title = screenplay.metadata.title or path.stem
    table = Table(title=f"{title} ({screenplay.source_format})", show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Heading", style="cyan", no_wrap=False)
    table.add_column("Characters", style="green")
    table.add_column("Action", justify="right")
    table.add_column("Dialogue", justify="right")

    for number, scene in enumerate(screenplay.scenes, start=1):
        table.add_row(
            str(number),
            scene.heading,
            ", ".join(scene.characters) or "-",
            str(len(scene.action)),
            str(len(scene.dialogues)),
        )

    console.print(table)
    stats = screenplay.stats
    console.print(
        f"[bold]{stats.scene_count}[/bold] scenes, "
        f"[bold]{stats.character_count}[/bold] characters, "
        f"[bold]{stats.total_words}[/bold] words, "
        f"~[bold]{stats.estimated_pages}[/bold] pages"
    )


def parse_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Screenplay file to parse",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    format_hint: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Source format: fdx, fountain, celtx, xml or html "
            "(default: file extension, then content detection)",
        ),
    ] = None,
    view: Annotated[
        View,
        typer.Option("--view", help="Which view of the screenplay to output"),
    ] = View.CANONICAL,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Parse a screenplay and print one of its views.

    The canonical view prints a scene table (or the full model with --json).
    The web and llm views are always JSON; the fountain view is plain text.
    """
    handler = CLIHandler(console)

    try:
        parser = ScreenplayParser(settings=get_settings())
        screenplay = parser.parse(path.read_bytes(), format_hint or _hint_from_path(path))
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if view is View.WEB:
        print(to_json(parser.web_display()))
    elif view is View.LLM:
        print(to_json(parser.llm_analysis()))
    elif view is View.FOUNTAIN:
        print(parser.export_fountain(), end="")
    elif json_output:
        print(to_json(screenplay))
    else:
        _print_summary(screenplay, path)


def detect_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Screenplay file to inspect",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Detect the source format of a screenplay from its content."""
    handler = CLIHandler(console)

    try:
        detected = detect_format(path.read_bytes())
    except OSError as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        print(to_json({"file": str(path), "format": detected.value}))
    else:
        console.print(f"{path.name}: [cyan]{detected.value}[/cyan]")
