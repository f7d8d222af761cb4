"""jsonapi-vanilla -- turn JSON:API documents into plain Python objects.

A JSON:API payload is built into a graph of :class:`Resource` objects whose
relationship fields point straight at other resources, cycles included.
Links, meta and the original member names are kept in identity-keyed side
tables on the returned :class:`Document`.

Typical usage::

    import jsonapi_vanilla

    doc = jsonapi_vanilla.parse(response_text)
    doc.data[0].comments[1].author.last_name      # "Gebhardt"
    doc.links[doc.data]["self"]                   # root links
    doc.find("comments", "5").body                # "First!"

Modules:
    parser: Loading, validation, schema inference and the graph builder.
    document: The read-only :class:`Document` query API.
    app: Typer CLI for inspecting documents from the shell.
    config: XDG-aware configuration for the CLI.
    output: stdout/stderr formatting with Rich support.
    exceptions: Exception hierarchy with exit-code mapping.
"""

__version__ = "0.3.0"

from jsonapi_vanilla.document import DataShape, Document  # noqa: E402
from jsonapi_vanilla.exceptions import InvalidRootStructure, VanillaError  # noqa: E402
from jsonapi_vanilla.parser.builder import build, parse  # noqa: E402
from jsonapi_vanilla.parser.registry import (  # noqa: E402
    Resource,
    is_stub,
    links_of,
    meta_of,
    to_dict,
)
from jsonapi_vanilla.parser.side_tables import AbsentData  # noqa: E402

__all__ = [
    "AbsentData",
    "DataShape",
    "Document",
    "InvalidRootStructure",
    "Resource",
    "VanillaError",
    "build",
    "is_stub",
    "links_of",
    "meta_of",
    "parse",
    "to_dict",
]
