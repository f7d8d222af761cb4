"""Resource objects and the per-build registry that owns them.

A :class:`Resource` is a plain object with a ``type``, an ``id`` and a map
of field values keyed by snake_case identifier.  Relationship fields hold
other :class:`Resource` instances (or lists of them) directly.  Since every
resource is created exactly once per ``(type, id)`` by the
:class:`ObjectRegistry`, those references form a graph that may contain
cycles; nothing ever walks it recursively.

Field names are chosen by the document, so a resource keeps its own
namespace almost empty: ``type``, ``id`` and :meth:`Resource.get` are the
only public members.  Everything else about a resource (its schema, links,
meta, stub flag, flattened form) is read through the module-level helpers
below, the way :func:`dataclasses.fields` and :func:`dataclasses.asdict`
work on dataclass instances::

    article.meta                  # the article's "meta" attribute, if any
    meta_of(article)              # the resource object's own meta member
"""

from __future__ import annotations

from collections.abc import Iterator
from types import MappingProxyType
from typing import Any, Mapping, Optional

from jsonapi_vanilla.parser.schema import Schema, SchemaRegistry
from jsonapi_vanilla.parser.side_tables import AbsentData


class Resource:
    """One JSON:API resource object.

    Field values are reachable two ways::

        article.title             # attribute fallback to the field map
        article.get("title")      # explicit, returns None when unset

    Attribute access follows the type's schema: a field some other resource
    of the same type carries reads as ``None`` here, while a name the schema
    has never seen raises :class:`AttributeError`.  A field named ``get``,
    or one whose identifier starts with an underscore, is only reachable
    through :meth:`get`.

    Equality and hashing are by identity, which is what lets resources key
    the builder's side tables.
    """

    def __init__(self, type_name: str, id_: Any, schema: Schema) -> None:
        self.type = type_name
        self.id = id_
        self._schema = schema
        self._fields: dict[str, Any] = {}
        self._links: Optional[dict[str, Any]] = None
        self._meta: Optional[dict[str, Any]] = None
        self._is_stub = True

    def get(self, identifier: str, default: Any = None) -> Any:
        """Return the value stored under *identifier*, or *default* when unset."""
        if identifier == "id":
            return self.id
        if identifier == "type":
            return self.type
        return self._fields.get(identifier, default)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        fields = self.__dict__.get("_fields", {})
        if name in fields:
            return fields[name]
        schema = self.__dict__.get("_schema")
        if schema is not None and name in schema:
            return None
        raise AttributeError(
            f"{self.__dict__.get('type')!r} resource has no field {name!r}"
        )

    def __repr__(self) -> str:
        return f"<{self._schema.class_name} type={self.type!r} id={self.id!r}>"


# --- Resource helpers ---


def schema_of(resource: Resource) -> Schema:
    """Return the schema shared by every resource of *resource*'s type."""
    return resource._schema


def fields_of(resource: Resource) -> Mapping[str, Any]:
    """Return a read-only view of the fields *resource* actually carries."""
    return MappingProxyType(resource._fields)


def links_of(resource: Resource) -> Optional[dict[str, Any]]:
    return resource._links


def meta_of(resource: Resource) -> Optional[dict[str, Any]]:
    return resource._meta


def is_stub(resource: Resource) -> bool:
    """Return True while *resource* is known only from relationship linkage."""
    return resource._is_stub


def set_field(resource: Resource, identifier: str, value: Any) -> None:
    """Store *value* under *identifier* and add the identifier to the type's schema."""
    resource._schema.add(identifier)
    resource._fields[identifier] = value


def mark_materialized(
    resource: Resource,
    links: Optional[dict[str, Any]] = None,
    meta: Optional[dict[str, Any]] = None,
) -> None:
    """Record that *resource*'s own object was seen, with its links and meta members."""
    resource._is_stub = False
    if links:
        resource._links = links
    if meta:
        resource._meta = meta


def as_reference(resource: Resource) -> dict[str, Any]:
    """Return the resource identifier object ``{"type": ..., "id": ...}``."""
    return {"type": resource.type, "id": resource.id}


def to_dict(resource: Resource) -> dict[str, Any]:
    """Flatten *resource* into JSON-friendly data.

    Related resources are rendered as identifier objects rather than
    expanded, so cyclic graphs flatten without recursion.
    """
    result: dict[str, Any] = {"type": resource.type, "id": resource.id}
    for identifier, value in resource._fields.items():
        result[identifier] = _flatten(value)
    return result


def _flatten(value: Any) -> Any:
    if isinstance(value, Resource):
        return as_reference(value)
    if isinstance(value, AbsentData):
        return None
    if isinstance(value, list):
        return [_flatten(item) for item in value]
    return value


class ObjectRegistry:
    """Arena of resources keyed by ``(type, id)``, in creation order.

    The registry is the only owner of the resources built during one call;
    relationship fields just point back into it.
    """

    def __init__(self, schemas: SchemaRegistry) -> None:
        self._schemas = schemas
        self._objects: dict[tuple[Any, Any], Resource] = {}

    def get_or_create(self, type_name: str, id_: Any) -> Resource:
        """Return the resource for ``(type_name, id_)``, creating a bare one if unknown."""
        key = (type_name, id_)
        resource = self._objects.get(key)
        if resource is None:
            resource = Resource(type_name, id_, self._schemas.schema_for(type_name))
            self._objects[key] = resource
        return resource

    def get(self, type_name: str, id_: Any) -> Optional[Resource]:
        return self._objects.get((type_name, id_))

    def all(self) -> Iterator[Resource]:
        """Iterate resources in the order they were first created."""
        yield from self._objects.values()

    def __contains__(self, key: object) -> bool:
        return key in self._objects

    def __len__(self) -> int:
        return len(self._objects)
