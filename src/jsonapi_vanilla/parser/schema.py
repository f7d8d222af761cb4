"""Per-document schema inference for resource types.

Every resource type seen while building a document gets a :class:`Schema`:
the set of field identifiers any resource of that type has carried so far.
Schemas only grow.  A resource that omits a field its siblings have simply
has no value for it.

Field names are normalised to snake_case identifiers by
:func:`identifier_for` so that ``first-name`` and ``firstName`` are both
reachable as ``first_name``.  The original spellings are kept separately in
the builder's ``original_keys`` side table.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_WORD = re.compile(r"[a-zA-Z_][a-zA-Z_0-9]*")

IMPLICIT_FIELDS = ("id", "type")


def identifier_for(name: str) -> str:
    """Normalise a JSON:API member name into a snake_case identifier.

    Examples::

        identifier_for("first-name")   # "first_name"
        identifier_for("lastName")     # "last_name"
        identifier_for("HTMLContent")  # "html_content"
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _CAMEL_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def class_name_for(type_name: str) -> str:
    """Return a CamelCase display name for a resource type (``blog-posts`` -> ``BlogPosts``)."""
    words = _WORD.findall(str(type_name))
    return "".join(word[:1].upper() + word[1:].lower() for word in words) or "Resource"


@dataclass
class Schema:
    """Known field identifiers for one resource type."""

    type_name: str
    fields: set[str] = field(default_factory=lambda: set(IMPLICIT_FIELDS))

    @property
    def class_name(self) -> str:
        return class_name_for(self.type_name)

    def add(self, identifier: str) -> None:
        self.fields.add(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.fields


class SchemaRegistry:
    """Map of resource type name to :class:`Schema`, scoped to one build call.

    Two documents may describe the same type name with different fields, so
    a registry must never be shared between builds.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}

    def schema_for(self, type_name: str) -> Schema:
        """Return the schema for *type_name*, creating an empty one on first use."""
        schema = self._schemas.get(type_name)
        if schema is None:
            schema = Schema(type_name)
            self._schemas[type_name] = schema
        return schema

    def register_fields(self, type_name: str, field_names: Iterable[str]) -> Schema:
        """Add the identifier form of each name in *field_names* to the type's schema.

        Registering a field that is already known is a no-op.

        Returns:
            The (possibly grown) schema.
        """
        schema = self.schema_for(type_name)
        for name in field_names:
            schema.add(identifier_for(name))
        return schema

    def types(self) -> list[str]:
        """Type names in the order they were first seen."""
        return list(self._schemas)

    def get(self, type_name: str) -> Schema | None:
        return self._schemas.get(type_name)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._schemas

    def __iter__(self) -> Iterator[Schema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)
