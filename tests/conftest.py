"""Shared test fixtures for jsonapi-vanilla.

Provides the jsonapi.org compound document in raw and built form, small
hand-written documents for cycles and errors, configuration isolation, and
output/CLI helpers.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from jsonapi_vanilla.document import Document
from jsonapi_vanilla.output import OutputFormat, OutputManager, reset_output, set_output
from jsonapi_vanilla.parser import build


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time, and
    CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def articles_path() -> Path:
    return FIXTURES_DIR / "articles.json"


@pytest.fixture
def articles_raw(articles_path: Path) -> dict[str, Any]:
    """The jsonapi.org articles/comments/people example as a plain dict."""
    with open(articles_path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def articles_doc(articles_raw: dict[str, Any]) -> Document:
    return build(copy.deepcopy(articles_raw))


@pytest.fixture
def cycle_raw() -> dict[str, Any]:
    """cycle/1 points at cycle/2, which points at itself."""
    return {
        "data": {
            "type": "cycle",
            "id": "1",
            "relationships": {"cycle": {"data": {"type": "cycle", "id": "2"}}},
        },
        "included": [
            {
                "type": "cycle",
                "id": "2",
                "attributes": {"body": "content"},
                "relationships": {"cycle": {"data": {"type": "cycle", "id": "2"}}},
            }
        ],
    }


@pytest.fixture
def errors_raw() -> dict[str, Any]:
    with open(FIXTURES_DIR / "errors.json", encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config/data directories at tmp_path and clear env overrides.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("jsonapi_vanilla.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("JSONAPI_VANILLA_FORMAT", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
