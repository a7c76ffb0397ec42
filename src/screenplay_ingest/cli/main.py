"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from screenplay_ingest import __version__
from screenplay_ingest.cli.commands import detect_command, parse_command
from screenplay_ingest.cli.handler import CLIHandler, to_json
from screenplay_ingest.config import (
    IngestSettings,
    configure_logging,
    get_logger,
    set_settings,
)
from screenplay_ingest.exceptions import ScreenplayIngestError

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="screenplay-ingest",
    help="Parse Final Draft, Fountain, Celtx and WriterDuet screenplays",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="parse")(parse_command)
app.command(name="detect")(detect_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show screenplay-ingest version."""
    version_info = {
        "name": "screenplay-ingest",
        "version": __version__,
        "description": "Multi-format screenplay ingestion",
    }

    if json_output:
        print(to_json(version_info))
    else:
        console.print(f"screenplay-ingest v{version_info['version']}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML or JSON)",
            envvar="SCREENPLAY_INGEST_CONFIG",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, ...)"),
    ] = None,
) -> None:
    """Configure global options."""
    cli_args: dict[str, object] = {"log_level": log_level}
    if debug:
        cli_args.update(debug=True, log_level="DEBUG")

    try:
        settings = IngestSettings.from_multiple_sources(
            config_files=[config] if config else None,
            cli_args=cli_args,
        )
    except ScreenplayIngestError as e:
        CLIHandler(console).handle_error(e)
        return
    except ValueError as e:
        # pydantic validation errors for CLI overrides
        CLIHandler(console).handle_error(e, exit_code=2)
        return

    set_settings(settings)
    configure_logging(settings)
    if config:
        logger.debug("Loaded configuration", path=str(config))
    if settings.debug:
        logger.debug("Debug mode enabled")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
