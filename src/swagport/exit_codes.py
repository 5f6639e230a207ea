"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~swagport.exceptions.SwagportError` subclass.
Shell wrappers and CI jobs can inspect the exit code to tell a broken
document apart from a broken network without parsing stderr.

Example::

    $ swagport convert petstore.yaml
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the document could not be loaded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred while fetching a remote document."""

EXIT_SPEC_PARSE_ERROR = 7
"""The Swagger document could not be parsed, validated, or dereferenced."""
