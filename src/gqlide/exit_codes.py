"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~gqlide.exceptions.GqlideError` subclass.

Example::

    $ gqlide execute '{ viewer { name } }'
    $ echo $?
    6   # EXIT_CONNECTION_ERROR -- the endpoint could not be reached
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""The GraphQL endpoint rejected the request credentials (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The GraphQL endpoint does not exist (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The endpoint answered with an HTTP error status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_RESPONSE_ERROR = 7
"""The endpoint answered with a body that is not valid JSON."""

EXIT_EXTENSION_ERROR = 10
"""An extension failed to load, activate, or register a contribution."""
