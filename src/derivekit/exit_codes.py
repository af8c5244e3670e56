"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~derivekit.exceptions.DeriveKitError` subclass.
Shell wrappers can inspect the exit code of ``derivekit`` to tell a broken
registry apart from a failing endpoint without parsing stderr.

Example::

    $ derivekit endpoints broken.yaml
    $ echo $?
    7   # EXIT_REGISTRY_ERROR -- the registry could not be loaded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""Invalid arguments, or a derived callable was invoked with the wrong arity."""

EXIT_AUTH_FAILURE = 3
"""The remote API rejected the credentials (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""An undeclared derived method was requested, or the API returned HTTP 404."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an error status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_REGISTRY_ERROR = 7
"""A registry could not be loaded, or its keys/descriptors are invalid."""
