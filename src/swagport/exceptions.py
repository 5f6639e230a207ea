"""Exception hierarchy for swagport.

All exceptions inherit from :class:`SwagportError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`swagport.exit_codes`.
The top-level error handler in :func:`swagport.app.main` catches
``SwagportError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SwagportError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- ConnectionError_        (exit 6)
    +-- SpecParseError          (exit 7)
    |   +-- DuplicateEndpointError
    +-- ConfigError             (exit 1)

Only load-phase failures are raised out of a conversion pass. Authoring
inconsistencies inside an otherwise loadable document (a security
requirement naming an undefined scheme, a parameter with an unknown
location) are skipped by the importer rather than raised.
"""

from swagport.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SwagportError(Exception):
    """Base exception for all swagport errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`swagport.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SwagportError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConnectionError_(SwagportError):
    """Raised on network-level failures while fetching a remote document.

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class SpecParseError(SwagportError):
    """Raised when a Swagger document cannot be loaded, parsed, or dereferenced."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class DuplicateEndpointError(SpecParseError):
    """Raised when a project would hold two endpoints with the same path and method."""


class ConfigError(SwagportError):
    """Raised for configuration problems (invalid JSON, unknown keys, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
