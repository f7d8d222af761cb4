"""Load JSON:API documents from a local file or stdin.

This is the I/O layer used by the command line; library callers that
already hold the text or a decoded mapping should call
:func:`~jsonapi_vanilla.parser.builder.parse` directly.

Content is decoded as JSON first and as YAML when that fails, so
hand-written fixtures can be kept in either format.  Every failure is
reported as :class:`~jsonapi_vanilla.exceptions.DocumentLoadError`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from jsonapi_vanilla.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)


def load_document(source: str) -> dict[str, Any]:
    """Load a document from a file path, or from stdin when *source* is ``-``.

    Args:
        source: A file path or ``-``.

    Returns:
        The decoded document.

    Raises:
        DocumentLoadError: If the source cannot be read or decoded, or does
            not hold an object.
    """
    if source == "-":
        return _load_from_stdin()
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError("No input received from stdin")

    return _parse_content(content, hint="")


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file, using the extension as a format hint."""
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Document file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Failed to read document file {path}: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError(f"Document file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    logger.debug("Loaded %d characters from %s", len(content), path)
    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode *content* as JSON, falling back to YAML unless *hint* is ``json``.

    Raises:
        DocumentLoadError: If neither decoder accepts the content or the
            result is not an object.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_object(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise DocumentLoadError(f"Invalid JSON: {exc}") from exc
            json_error = exc

    try:
        return _require_object(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        msg = "Failed to parse document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise DocumentLoadError(msg) from exc


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentLoadError(f"Document must be a JSON/YAML object (got {kind})")
    return result
