"""Build a :class:`~jsonapi_vanilla.document.Document` from a decoded JSON:API payload.

The build runs in two passes over ``included + data`` (in that order):

1. **Materialise.**  Every resource object becomes a
   :class:`~jsonapi_vanilla.parser.registry.Resource`, its attributes are
   assigned, and its ``links`` are recorded.  After this pass every resource
   that appears anywhere in the document exists.
2. **Link.**  Relationship objects are validated and resolved against the
   registry.  Because all targets already exist, forward references and
   cycles need no special handling.  A reference to a resource that appears
   nowhere in the document creates a stub holding only ``type`` and ``id``.

Finally the top-level ``data`` is rebuilt in its original shape and keyed to
the root ``links`` and ``meta``.

The public entry points are :func:`build` (decoded mapping) and
:func:`parse` (JSON text or decoded mapping).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Union

from jsonapi_vanilla.document import DataShape, Document
from jsonapi_vanilla.parser.registry import ObjectRegistry, Resource, mark_materialized, set_field
from jsonapi_vanilla.parser.schema import SchemaRegistry, identifier_for
from jsonapi_vanilla.parser.side_tables import AbsentData, SideTables
from jsonapi_vanilla.parser.validator import validate_relationship_object, validate_root

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Two-pass builder holding the registries for a single document.

    A builder is single use: create one per document and call :meth:`build`
    once.  Nothing is shared between builders, so two documents may give the
    same type name different fields.

    Args:
        root: The decoded document.
    """

    def __init__(self, root: Mapping[str, Any]) -> None:
        self._root = root
        self.schemas = SchemaRegistry()
        self.objects = ObjectRegistry(self.schemas)
        self.tables = SideTables()

    def build(self) -> Document:
        """Validate the root, run both passes and return the finished document.

        Raises:
            InvalidRootStructure: If the root or any relationship object is
                missing all of its required members.
        """
        validate_root(self._root)

        shape, primary = _primary_hashes(self._root.get("data"))
        included = self._root.get("included") or []
        all_hashes = list(included) + primary

        for resource_hash in all_hashes:
            self._materialize(resource_hash)
        logger.debug(
            "Materialized %d resources across %d types from %d resource objects",
            len(self.objects),
            len(self.schemas),
            len(all_hashes),
        )

        relationship_count = 0
        for resource_hash in all_hashes:
            relationship_count += self._link(resource_hash)
        logger.debug("Resolved %d relationships", relationship_count)

        data = self._assemble(shape, primary)
        return Document(
            data,
            shape=shape,
            errors=self._root.get("errors"),
            objects=self.objects,
            schemas=self.schemas,
            tables=self.tables,
        )

    # ------------------------------------------------------------------ #
    # Pass 1
    # ------------------------------------------------------------------ #

    def _materialize(self, resource_hash: Mapping[str, Any]) -> Resource:
        type_name = resource_hash.get("type")
        attributes = resource_hash.get("attributes") or {}
        relationships = resource_hash.get("relationships") or {}

        self.schemas.register_fields(type_name, list(attributes) + list(relationships))
        resource = self.objects.get_or_create(type_name, resource_hash.get("id"))
        links = resource_hash.get("links")
        mark_materialized(resource, links=links, meta=resource_hash.get("meta"))

        for key, value in attributes.items():
            self._assign(resource, key, value)

        if links:
            self.tables.links[resource] = links
        return resource

    # ------------------------------------------------------------------ #
    # Pass 2
    # ------------------------------------------------------------------ #

    def _link(self, resource_hash: Mapping[str, Any]) -> int:
        resource = self.objects.get_or_create(resource_hash.get("type"), resource_hash.get("id"))
        relationships = resource_hash.get("relationships") or {}

        for name, value in relationships.items():
            validate_relationship_object(value)
            ref = self._resolve(value.get("data"))
            self._assign(resource, name, ref)
            self.tables.rel_links[ref] = value.get("links")
            self.tables.meta[ref] = value.get("meta")
        return len(relationships)

    def _resolve(self, linkage: Any) -> Union[Resource, list[Resource], AbsentData]:
        """Turn relationship linkage data into resource references.

        ``null`` linkage resolves like missing linkage, to a fresh
        :class:`AbsentData` marker.  An empty object is still a to-one
        reference, to the resource with neither type nor id.
        """
        if isinstance(linkage, list):
            return [self._target(identifier) for identifier in linkage]
        if linkage is not None:
            return self._target(linkage)
        return AbsentData()

    def _target(self, identifier: Mapping[str, Any]) -> Resource:
        key = (identifier.get("type"), identifier.get("id"))
        if key not in self.objects:
            logger.debug("Creating stub for unresolved reference %s/%s", *key)
        return self.objects.get_or_create(*key)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _assign(self, resource: Resource, key: str, value: Any) -> None:
        set_field(resource, identifier_for(key), value)
        self.tables.record_original(resource, key, value)

    def _assemble(
        self, shape: DataShape, primary: list[Mapping[str, Any]]
    ) -> Union[None, Resource, list[Resource]]:
        if shape == DataShape.ABSENT:
            data: Union[None, Resource, list[Resource]] = None
        else:
            resolved = [self.objects.get(h.get("type"), h.get("id")) for h in primary]
            data = resolved if shape == DataShape.MANY else resolved[0]

        self.tables.links[data] = self._root.get("links")
        self.tables.meta[data] = self._root.get("meta")
        return data


def _primary_hashes(data: Any) -> tuple[DataShape, list[Mapping[str, Any]]]:
    if isinstance(data, list):
        return DataShape.MANY, data
    if data is None:
        return DataShape.ABSENT, []
    return DataShape.SINGLE, [data]


def build(root: Mapping[str, Any]) -> Document:
    """Build a document from an already-decoded JSON:API payload.

    Example::

        >>> doc = build({"errors": [{"status": "400", "detail": "Bad"}]})
        >>> doc.errors[0]["detail"]
        'Bad'

    Raises:
        InvalidRootStructure: If the document is structurally invalid.
    """
    return GraphBuilder(root).build()


def parse(payload: Union[str, bytes, Mapping[str, Any]]) -> Document:
    """Parse a JSON:API payload given as JSON text or as a decoded mapping.

    Example::

        >>> doc = parse(open("articles.json").read())
        >>> doc.data[0].comments[1].author.last_name
        'Gebhardt'

    Raises:
        json.JSONDecodeError: If *payload* is text that is not valid JSON.
        InvalidRootStructure: If the document is structurally invalid.
    """
    if isinstance(payload, (str, bytes, bytearray)):
        payload = json.loads(payload)
    return build(payload)
