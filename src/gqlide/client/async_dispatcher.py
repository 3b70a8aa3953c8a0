"""Asynchronous request dispatcher -- mirrors :class:`~gqlide.client.dispatcher.RequestDispatcher`.

The network call is the only suspension point. The dispatcher keeps no
per-operation state, so several operations may be in flight at once.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from gqlide.client.base import DispatcherBase
from gqlide.exceptions import ConnectionError_, TransportError
from gqlide.models import CredentialMode, GraphQLOperation


class AsyncRequestDispatcher(DispatcherBase):
    """Executes GraphQL operations over :class:`httpx.AsyncClient`.

    Example::

        async with AsyncRequestDispatcher(profile, hooks=bus) as dispatcher:
            body = await dispatcher.execute(operation, is_authenticated=False)
    """

    _client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> AsyncRequestDispatcher:
        self._authenticate()
        self._client = httpx.AsyncClient(**self._client_options())
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(self, operation: GraphQLOperation, is_authenticated: bool = True) -> Any:
        """Send *operation* and return the decoded JSON body as-is.

        Behaves identically to
        :meth:`~gqlide.client.dispatcher.RequestDispatcher.execute` but is
        non-blocking.
        """
        assert self._client is not None, "Dispatcher not initialised -- use as async context manager"

        mode = self._prepare(operation, is_authenticated)
        request = self._build_request(self._client, operation, mode)
        try:
            if mode is CredentialMode.OMIT:
                response = await self._send_without_cookies(request)
            else:
                response = await self._client.send(request)
        except httpx.RequestError as exc:
            raise self._fail(
                operation, ConnectionError_(f"Request to {self._profile.endpoint} failed: {exc}")
            ) from exc

        try:
            return self._parse_response(operation, response)
        except TransportError as exc:
            raise self._fail(operation, exc)

    async def _send_without_cookies(self, request: httpx.Request) -> httpx.Response:
        assert self._client is not None
        jar = httpx.Cookies(self._client.cookies)
        try:
            response = await self._client.send(request, follow_redirects=False)
            hops = 0
            while True:
                next_request = self._next_cookieless_request(self._client, response, hops)
                if next_request is None:
                    return response
                hops += 1
                response = await self._client.send(next_request, follow_redirects=False)
        finally:
            self._client.cookies = jar
