"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~jsonapi_vanilla.exceptions.VanillaError` subclass.
Shell scripts can inspect the exit code to tell a malformed document apart
from a missing file without parsing stderr.

Example::

    $ jsonapi-vanilla summary response.json
    $ echo $?
    8   # EXIT_INVALID_DOCUMENT -- no data, errors or meta at the root
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""The requested resource is not part of the document."""

EXIT_DOCUMENT_LOAD_ERROR = 7
"""The document could not be read or decoded."""

EXIT_INVALID_DOCUMENT = 8
"""The document decoded but is not a structurally valid JSON:API document."""
