"""Exception hierarchy for gqlide.

All exceptions inherit from :class:`GqlideError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`gqlide.exit_codes`.
The top-level error handler in :func:`gqlide.app.main` catches
``GqlideError`` and exits with the appropriate code.

Only transport failures are meant to reach callers of the request
dispatcher. Registration and hook failures are caught at their boundary,
logged, and surfaced as hook events instead of being raised.

Subclass hierarchy::

    GqlideError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- TransportError          (exit 5)
    |   +-- AuthError           (exit 3)
    |   +-- NotFoundError       (exit 4)
    |   +-- ServerError         (exit 5)
    |   +-- ConnectionError_    (exit 6)
    |   +-- ResponseDecodeError (exit 7)
    +-- ExtensionError          (exit 10)
    |   +-- RegistrationError   (exit 10)
    +-- ConfigError             (exit 1)
"""

from gqlide.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_EXTENSION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_RESPONSE_ERROR,
    EXIT_SERVER_ERROR,
)


class GqlideError(Exception):
    """Base exception for all gqlide errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(GqlideError):
    """Raised for invalid CLI arguments (e.g. variables that are not a JSON object)."""

    exit_code = EXIT_INVALID_USAGE


class TransportError(GqlideError):
    """Base class for failures of the outgoing GraphQL request.

    Carries the HTTP status code when one was received.
    """

    exit_code = EXIT_SERVER_ERROR

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, exit_code)
        self.status_code = status_code


class AuthError(TransportError):
    """Raised when the endpoint answers HTTP 401 or 403, or credentials cannot be built."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(TransportError):
    """Raised when the endpoint answers HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(TransportError):
    """Raised for any other HTTP error status (4xx or 5xx)."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(TransportError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ResponseDecodeError(TransportError):
    """Raised when a successful response does not carry a JSON body."""

    exit_code = EXIT_RESPONSE_ERROR


class ExtensionError(GqlideError):
    """Raised when an extension fails to load or activate."""

    exit_code = EXIT_EXTENSION_ERROR


class RegistrationError(ExtensionError):
    """Raised inside the registry when a contribution cannot be stored.

    Never escapes :meth:`~gqlide.extensions.registry.ExtensionRegistry.register`;
    it is delivered to listeners of the ``<kind>_register_error`` event.
    """


class ConfigError(GqlideError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
