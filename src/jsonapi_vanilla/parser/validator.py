"""Structural pre-checks for JSON:API documents.

Only two checks are made, mirroring the minimum the JSON:API specification
requires of a top-level document and of a relationship object.  Anything
beyond that (resource semantics, member types) is left to the caller.

Both functions raise :class:`~jsonapi_vanilla.exceptions.InvalidRootStructure`
on the first violation; there is no per-relationship recovery.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsonapi_vanilla.exceptions import InvalidRootStructure

ROOT_MEMBERS = ("data", "errors", "meta")
RELATIONSHIP_MEMBERS = ("data", "meta", "links")


def validate_root(root: Any) -> None:
    """Check that *root* has at least one of ``data``, ``errors``, ``meta``.

    Presence is about keys, not values: ``{"data": null}`` and
    ``{"data": []}`` are both accepted.

    Args:
        root: The decoded document.

    Raises:
        InvalidRootStructure: If *root* is not a mapping or has none of the
            required members.
    """
    if not isinstance(root, Mapping):
        raise InvalidRootStructure(
            f"JSON:API document must be an object (got {type(root).__name__})"
        )
    if not _present(root, ROOT_MEMBERS):
        raise InvalidRootStructure(
            "JSON:API document must contain at least one of these objects: "
            + ", ".join(ROOT_MEMBERS)
        )


def validate_relationship_object(value: Any) -> None:
    """Check that a relationship object has at least one of ``data``, ``meta``, ``links``.

    Raises:
        InvalidRootStructure: If *value* is not a mapping or has none of the
            required members.
    """
    if not isinstance(value, Mapping) or not _present(value, RELATIONSHIP_MEMBERS):
        raise InvalidRootStructure(
            "JSON:API relationship must contain at least one of these objects: "
            + ", ".join(RELATIONSHIP_MEMBERS)
        )


def _present(obj: Mapping[Any, Any], members: tuple[str, ...]) -> bool:
    keys = {str(key) for key in obj}
    return any(member in keys for member in members)
