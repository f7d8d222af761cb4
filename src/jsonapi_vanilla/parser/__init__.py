"""JSON:API document parser -- load, validate, and build the resource graph.

Typical usage::

    from jsonapi_vanilla.parser import load_document, build

    doc = build(load_document("articles.json"))
    doc.data[0].comments[1].author.last_name

Sub-modules:

* :mod:`~jsonapi_vanilla.parser.loader` -- file/stdin I/O with JSON and
  YAML decoding, for the CLI.
* :mod:`~jsonapi_vanilla.parser.validator` -- the two structural checks.
* :mod:`~jsonapi_vanilla.parser.schema` -- member-name normalisation and
  per-type schema inference.
* :mod:`~jsonapi_vanilla.parser.registry` -- :class:`Resource` and the
  ``(type, id)`` registry that owns them.
* :mod:`~jsonapi_vanilla.parser.side_tables` -- identity-keyed tables for
  links, meta and original member names.
* :mod:`~jsonapi_vanilla.parser.builder` -- the two-pass graph builder.
"""

from jsonapi_vanilla.parser.builder import GraphBuilder, build, parse
from jsonapi_vanilla.parser.loader import load_document
from jsonapi_vanilla.parser.registry import (
    Resource,
    as_reference,
    fields_of,
    is_stub,
    links_of,
    meta_of,
    schema_of,
    to_dict,
)
from jsonapi_vanilla.parser.side_tables import AbsentData

__all__ = [
    "GraphBuilder",
    "build",
    "parse",
    "load_document",
    "Resource",
    "AbsentData",
    "as_reference",
    "fields_of",
    "is_stub",
    "links_of",
    "meta_of",
    "schema_of",
    "to_dict",
]
