"""Shared test fixtures for swagport.

Provides reusable fixtures for loading document fixtures, creating isolated
config environments, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from swagport.models import Project
from swagport.output import OutputFormat, OutputManager, reset_output, set_output
from swagport.parser.document import LoadedDocument, prepare_document


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and log handlers after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()
    logger = logging.getLogger("swagport")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    """Path to the petstore Swagger 2.0 fixture."""
    return FIXTURES_DIR / "petstore_2.0.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Load the raw petstore Swagger 2.0 document."""
    with open(petstore_path) as f:
        return json.load(f)


@pytest.fixture
def petstore_document(petstore_raw: dict[str, Any]) -> LoadedDocument:
    """Raw and dereferenced views of the petstore document."""
    return prepare_document(petstore_raw)


@pytest.fixture
def petstore_project(petstore_document: LoadedDocument) -> Project:
    """The petstore document imported into a project."""
    from swagport.importer import assemble_project

    return assemble_project(petstore_document)


@pytest.fixture
def minimal_spec() -> dict[str, Any]:
    """A Swagger 2.0 document with a single parameterless GET."""
    return {
        "swagger": "2.0",
        "info": {"title": "Minimal", "version": "1.0"},
        "paths": {
            "/ping": {"get": {"responses": {"200": {"description": "pong"}}}},
        },
    }


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config. Clears all SWAGPORT_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("swagport.config._is_xdg_platform", lambda: True)

    for var in [
        "SWAGPORT_EXPAND",
        "SWAGPORT_RESPONSE_MIME_TYPE",
        "SWAGPORT_TIMEOUT",
        "SWAGPORT_FORMAT",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
