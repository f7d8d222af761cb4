"""Tests for jsonapi_vanilla.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest

from jsonapi_vanilla.exceptions import DocumentLoadError
from jsonapi_vanilla.exit_codes import EXIT_DOCUMENT_LOAD_ERROR
from jsonapi_vanilla.parser.loader import _parse_content, load_document

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# load_document dispatch
# ---------------------------------------------------------------------------


class TestLoadDocument:
    """load_document routes files and stdin to the right reader."""

    def test_loads_json_file(self) -> None:
        result = load_document(str(FIXTURES_DIR / "articles.json"))
        assert result["data"][0]["type"] == "articles"
        assert len(result["included"]) == 3

    def test_loads_yaml_file(self) -> None:
        result = load_document(str(FIXTURES_DIR / "cycle.yaml"))
        assert result["data"]["id"] == "1"
        assert result["included"][0]["attributes"]["body"] == "content"

    def test_loads_json_without_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "response"
        path.write_text(json.dumps({"meta": {"total": 0}}), encoding="utf-8")
        assert load_document(str(path)) == {"meta": {"total": 0}}

    def test_loads_from_stdin(self) -> None:
        payload = json.dumps({"data": {"type": "people", "id": "9"}})
        with patch("jsonapi_vanilla.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(payload)
            result = load_document("-")
        assert result["data"]["id"] == "9"


# ---------------------------------------------------------------------------
# File failures
# ---------------------------------------------------------------------------


class TestLoadFromFileErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError, match="not found"):
            load_document(str(tmp_path / "missing.json"))

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("   \n", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="empty"):
            load_document(str(path))

    def test_invalid_json_with_json_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="Invalid JSON"):
            load_document(str(path))

    def test_array_document_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "array.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="got list"):
            load_document(str(path))

    def test_error_exit_code(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError) as exc_info:
            load_document(str(tmp_path / "missing.json"))
        assert exc_info.value.exit_code == EXIT_DOCUMENT_LOAD_ERROR


class TestLoadFromStdinErrors:
    def test_empty_stdin(self) -> None:
        with patch("jsonapi_vanilla.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("")
            with pytest.raises(DocumentLoadError, match="No input"):
                load_document("-")

    def test_whitespace_only_stdin(self) -> None:
        with patch("jsonapi_vanilla.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("  \n\t ")
            with pytest.raises(DocumentLoadError):
                load_document("-")


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    def test_parses_json(self) -> None:
        assert _parse_content('{"data": []}') == {"data": []}

    def test_parses_yaml(self) -> None:
        content = textwrap.dedent("""\
            errors:
              - status: "404"
                title: Not Found
        """)
        assert _parse_content(content) == {"errors": [{"status": "404", "title": "Not Found"}]}

    def test_json_hint_forbids_yaml_fallback(self) -> None:
        with pytest.raises(DocumentLoadError, match="Invalid JSON"):
            _parse_content("meta: {}", hint="json")

    def test_yaml_hint_skips_json(self) -> None:
        assert _parse_content('{"meta": {}}', hint="yaml") == {"meta": {}}

    def test_undecodable_content(self) -> None:
        with pytest.raises(DocumentLoadError, match="JSON or YAML"):
            _parse_content("{unclosed: [")

    def test_scalar_content_rejected(self) -> None:
        with pytest.raises(DocumentLoadError, match="got str"):
            _parse_content("just text")

    def test_null_yaml_rejected(self) -> None:
        with pytest.raises(DocumentLoadError, match="empty document"):
            _parse_content("~", hint="yaml")
