"""Read-only result of building a JSON:API document.

A :class:`Document` wraps the resources created by one build together with
the side tables holding everything that is not a resource field: resource
and root ``links``, relationship ``links`` and ``meta``, and the original
(un-normalised) member names.

The side tables are keyed by identity, so look-ups must use the exact object
taken from the document::

    doc.links[doc.data]                    # root links
    doc.links[doc.data[0]]                 # the first resource's links
    doc.rel_links[doc.data[0].comments]    # links of the comments relationship
    doc.original_keys[doc.find("people", "9")]["first-name"]

An equal but distinct list will not match.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

if TYPE_CHECKING:
    from jsonapi_vanilla.parser.registry import ObjectRegistry, Resource
    from jsonapi_vanilla.parser.schema import Schema, SchemaRegistry
    from jsonapi_vanilla.parser.side_tables import SideTables


class DataShape(str, enum.Enum):
    """Shape of the top-level ``data`` member."""

    ABSENT = "absent"
    SINGLE = "single"
    MANY = "many"


class ResourceSet(Sequence):
    """All resources of one type, in the order they were created.

    The set is evaluated lazily against the finished registry on every
    iteration, so it can be iterated any number of times.
    """

    def __init__(self, objects: ObjectRegistry, type_name: str) -> None:
        self._objects = objects
        self._type_name = type_name

    def __iter__(self) -> Iterator[Resource]:
        return (obj for obj in self._objects.all() if obj.type == self._type_name)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __getitem__(self, index):  # noqa: ANN001, ANN204
        return list(self)[index]

    def __repr__(self) -> str:
        return f"ResourceSet({self._type_name!r}, {list(self)!r})"


class Document:
    """Query API over one built JSON:API document.

    Instances are created by :func:`~jsonapi_vanilla.parser.builder.build`;
    treat them as immutable.

    Attributes:
        data: ``None``, a single resource, or a list of resources, mirroring
            the shape of the input ``data`` member.
        data_shape: Which of those three shapes ``data`` has.
        errors: The root ``errors`` array exactly as decoded, or ``None``.
    """

    def __init__(
        self,
        data: Union[None, Resource, list[Resource]],
        *,
        shape: DataShape,
        errors: Optional[list[Any]],
        objects: ObjectRegistry,
        schemas: SchemaRegistry,
        tables: SideTables,
    ) -> None:
        self.data = data
        self.data_shape = shape
        self.errors = errors
        self._objects = objects
        self._schemas = schemas
        self._tables = tables

    # ------------------------------------------------------------------ #
    # Side tables
    # ------------------------------------------------------------------ #

    @property
    def links(self) -> Mapping[Any, Any]:
        """Resource -> resource ``links``; ``data`` -> root ``links``."""
        return MappingProxyType(self._tables.links)

    @property
    def rel_links(self) -> Mapping[Any, Any]:
        """Relationship value -> relationship ``links``."""
        return MappingProxyType(self._tables.rel_links)

    @property
    def meta(self) -> Mapping[Any, Any]:
        """Relationship value -> relationship ``meta``; ``data`` -> root ``meta``."""
        return MappingProxyType(self._tables.meta)

    @property
    def original_keys(self) -> Mapping[Any, dict[str, Any]]:
        """Resource -> ``{original member name: value}``."""
        return MappingProxyType(self._tables.original_keys)

    @property
    def root_links(self) -> Optional[dict[str, Any]]:
        return self._tables.links.get(self.data)

    @property
    def root_meta(self) -> Optional[dict[str, Any]]:
        return self._tables.meta.get(self.data)

    def links_for(self, key: Any) -> Optional[dict[str, Any]]:
        """Return the links recorded for *key* (a resource or ``data``), or ``None``."""
        return self._tables.links.get(key)

    def rel_links_and_meta(self, ref: Any) -> Optional[tuple[Any, Any]]:
        """Return ``(links, meta)`` for a resolved relationship value.

        Returns ``None`` when *ref* was never the value of a relationship.
        """
        if ref not in self._tables.rel_links:
            return None
        return self._tables.rel_links[ref], self._tables.meta.get(ref)

    def original_keys_for(self, resource: Resource) -> Optional[dict[str, Any]]:
        return self._tables.original_keys.get(resource)

    # ------------------------------------------------------------------ #
    # Resources
    # ------------------------------------------------------------------ #

    def find(self, type_name: str, id_: Any) -> Optional[Resource]:
        """Return the resource with the given type and id, or ``None``."""
        return self._objects.get(type_name, id_)

    def find_all(self, type_name: str) -> ResourceSet:
        """Return every resource of *type_name*, including relationship stubs."""
        return ResourceSet(self._objects, type_name)

    def resources(self) -> Iterator[Resource]:
        return self._objects.all()

    def types(self) -> list[str]:
        """Resource type names in first-seen order."""
        return self._schemas.types()

    def schema(self, type_name: str) -> Optional[Schema]:
        return self._schemas.get(type_name)

    def __repr__(self) -> str:
        return (
            f"<Document data={self.data_shape.value} resources={len(self._objects)} "
            f"errors={len(self.errors) if self.errors is not None else 0}>"
        )
