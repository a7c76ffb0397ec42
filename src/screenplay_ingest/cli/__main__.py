"""Main entry point for the screenplay-ingest CLI when run as a module."""

from screenplay_ingest.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
