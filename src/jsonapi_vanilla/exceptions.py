"""Exception hierarchy for jsonapi-vanilla.

All exceptions inherit from :class:`VanillaError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`jsonapi_vanilla.exit_codes`.  The CLI entry point in
:func:`jsonapi_vanilla.app.main` catches ``VanillaError`` and exits with the
matching code.

Subclass hierarchy::

    VanillaError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- ResourceNotFoundError  (exit 4)
    +-- DocumentLoadError      (exit 7)
    +-- InvalidRootStructure   (exit 8)
    +-- ConfigError            (exit 1)

Only :class:`InvalidRootStructure` is raised by the document builder itself.
JSON decoding errors raised by :func:`jsonapi_vanilla.parse` are passed
through as :class:`json.JSONDecodeError`.
"""

from jsonapi_vanilla.exit_codes import (
    EXIT_DOCUMENT_LOAD_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_DOCUMENT,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
)


class VanillaError(Exception):
    """Base exception for all jsonapi-vanilla errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(VanillaError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ResourceNotFoundError(VanillaError):
    """Raised when a ``(type, id)`` lookup requested on the command line has no match."""

    exit_code = EXIT_NOT_FOUND


class DocumentLoadError(VanillaError):
    """Raised when a document file cannot be read or decoded as JSON/YAML."""

    exit_code = EXIT_DOCUMENT_LOAD_ERROR


class InvalidRootStructure(VanillaError):
    """Raised when a document or one of its relationship objects lacks every required member.

    A document root must contain at least one of ``data``, ``errors`` or
    ``meta``; a relationship object must contain at least one of ``data``,
    ``meta`` or ``links``.
    """

    exit_code = EXIT_INVALID_DOCUMENT


class ConfigError(VanillaError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
