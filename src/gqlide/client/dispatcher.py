"""Synchronous request dispatcher backed by :class:`httpx.Client`.

See Also:
    :class:`~gqlide.client.async_dispatcher.AsyncRequestDispatcher` for the
    non-blocking equivalent used by the editor session.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from gqlide.client.base import DispatcherBase
from gqlide.exceptions import ConnectionError_, TransportError
from gqlide.models import CredentialMode, GraphQLOperation


class RequestDispatcher(DispatcherBase):
    """Executes GraphQL operations over a blocking HTTP client.

    Must be used as a context manager so that the transport is opened and
    closed and credentials are resolved once.

    Example::

        with RequestDispatcher(profile) as dispatcher:
            body = dispatcher.execute(GraphQLOperation(query="{ viewer { name } }"))
    """

    _client: Optional[httpx.Client] = None

    def __enter__(self) -> RequestDispatcher:
        self._authenticate()
        self._client = httpx.Client(**self._client_options())
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def execute(self, operation: GraphQLOperation, is_authenticated: bool = True) -> Any:
        """Send *operation* and return the decoded JSON body as-is.

        Args:
            operation: The operation document, variables and name.
            is_authenticated: The session's auth toggle. Ignored for
                introspection-class operations, which always carry
                credentials.

        Raises:
            AuthError: On HTTP 401 / 403.
            NotFoundError: On HTTP 404.
            ServerError: On any other HTTP error status.
            ConnectionError_: On network or timeout errors, or too many redirects.
            ResponseDecodeError: When the body is not JSON.
        """
        assert self._client is not None, "Dispatcher not initialised -- use as context manager"

        mode = self._prepare(operation, is_authenticated)
        request = self._build_request(self._client, operation, mode)
        try:
            if mode is CredentialMode.OMIT:
                response = self._send_without_cookies(request)
            else:
                response = self._client.send(request)
        except httpx.RequestError as exc:
            raise self._fail(
                operation, ConnectionError_(f"Request to {self._profile.endpoint} failed: {exc}")
            ) from exc

        try:
            return self._parse_response(operation, response)
        except TransportError as exc:
            raise self._fail(operation, exc)

    def _send_without_cookies(self, request: httpx.Request) -> httpx.Response:
        """Send *request* and follow redirects without reading or writing the cookie jar."""
        assert self._client is not None
        jar = httpx.Cookies(self._client.cookies)
        try:
            response = self._client.send(request, follow_redirects=False)
            hops = 0
            while True:
                next_request = self._next_cookieless_request(self._client, response, hops)
                if next_request is None:
                    return response
                hops += 1
                response = self._client.send(next_request, follow_redirects=False)
        finally:
            self._client.cookies = jar
