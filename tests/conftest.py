"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from screenplay_ingest.config import IngestSettings, reset_settings, set_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "screenplays"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test with default settings, ignoring the caller's environment."""
    for name in (
        "SCREENPLAY_INGEST_WORDS_PER_PAGE",
        "SCREENPLAY_INGEST_FALLBACK_ENCODING",
        "SCREENPLAY_INGEST_LOG_LEVEL",
        "SCREENPLAY_INGEST_LOG_FORMAT",
        "SCREENPLAY_INGEST_LOG_FILE",
        "SCREENPLAY_INGEST_DEBUG",
        "SCREENPLAY_INGEST_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)

    set_settings(IngestSettings(_env_file=None))

    yield

    reset_settings()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample screenplays."""
    return FIXTURES_DIR


@pytest.fixture
def fountain_text() -> str:
    """Fountain script with a title page, two scenes and three transitions."""
    return (FIXTURES_DIR / "sample.fountain").read_text(encoding="utf-8")


@pytest.fixture
def fdx_text() -> str:
    """Final Draft script with a title page and a Shot paragraph."""
    return (FIXTURES_DIR / "sample.fdx").read_text(encoding="utf-8")


@pytest.fixture
def celtx_text() -> str:
    """Namespaced Celtx script using both scene/heading element names."""
    return (FIXTURES_DIR / "sample.celtx").read_text(encoding="utf-8")


@pytest.fixture
def writerduet_text() -> str:
    """WriterDuet HTML export with nested page containers."""
    return (FIXTURES_DIR / "sample.html").read_text(encoding="utf-8")
