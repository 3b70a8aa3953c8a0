"""Request building and response mapping shared by both dispatchers.

The two dispatchers differ only in how they perform I/O. Everything that
decides *what* is sent and *how* the answer is interpreted lives here.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from gqlide.auth.base import CredentialResult
from gqlide.auth.manager import CredentialManager, create_default_manager
from gqlide.client.classify import classify_operation
from gqlide.exceptions import (
    AuthError,
    NotFoundError,
    ResponseDecodeError,
    ServerError,
    TransportError,
)
from gqlide.hooks.bus import HookBus
from gqlide.hooks.events import HookEvent
from gqlide.models import CredentialMode, GraphQLOperation, Profile

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"


class DispatcherBase:
    """State and helpers common to the sync and async dispatchers.

    Args:
        profile: Endpoint, credentials and request settings.
        credential_manager: Builds the session and transport credentials.
            Defaults to :func:`~gqlide.auth.manager.create_default_manager`.
        hooks: Optional bus receiving ``before_request``, ``after_response``
            and ``request_error`` events.
    """

    def __init__(
        self,
        profile: Profile,
        credential_manager: Optional[CredentialManager] = None,
        hooks: Optional[HookBus] = None,
    ) -> None:
        self._profile = profile
        self._credential_manager = credential_manager or create_default_manager()
        self._hooks = hooks
        self._session_credentials: Optional[CredentialResult] = None
        self._transport_credentials: Optional[CredentialResult] = None

    @property
    def profile(self) -> Profile:
        return self._profile

    def _authenticate(self) -> None:
        """Resolve both credential layers once, when the dispatcher is entered."""
        self._transport_credentials = self._credential_manager.authenticate(
            self._profile.transport_auth
        )
        self._session_credentials = self._credential_manager.authenticate(
            self._profile.session_auth
        )

    def _client_options(self) -> dict[str, Any]:
        config = self._profile.request
        return {
            "timeout": config.timeout,
            "verify": config.verify_ssl,
            "follow_redirects": True,
        }

    def _prepare(self, operation: GraphQLOperation, is_authenticated: bool) -> CredentialMode:
        mode = classify_operation(operation.query, is_authenticated)
        logger.debug(
            "Dispatching operation %s with credentials=%s",
            operation.operation_name or "(anonymous)",
            mode.value,
        )
        self._dispatch_hook(HookEvent.BEFORE_REQUEST, operation, mode)
        return mode

    def _build_headers(self, mode: CredentialMode) -> dict[str, str]:
        """Assemble request headers for *mode*.

        Transport credentials are always present; session credentials are
        layered on top only for :attr:`CredentialMode.INCLUDE`.
        """
        credentials = self._transport_credentials or CredentialResult()
        if mode is CredentialMode.INCLUDE and self._session_credentials is not None:
            credentials = credentials.merged_with(self._session_credentials)

        headers: dict[str, str] = {"Accept": CONTENT_TYPE, **credentials.headers}
        if credentials.cookies:
            headers["Cookie"] = "; ".join(f"{k}={v}" for k, v in credentials.cookies.items())
        headers["Content-Type"] = CONTENT_TYPE
        return headers

    def _build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        operation: GraphQLOperation,
        mode: CredentialMode,
    ) -> httpx.Request:
        headers = self._build_headers(mode)
        request = client.build_request(
            "POST",
            self._profile.endpoint,
            headers=headers,
            json=operation.to_payload(),
        )
        if mode is CredentialMode.OMIT and "Cookie" not in headers:
            # Cookies remembered by the client's jar are session state too.
            request.headers.pop("Cookie", None)
        return request

    def _next_cookieless_request(
        self, client: httpx.Client | httpx.AsyncClient, response: httpx.Response, hops: int
    ) -> Optional[httpx.Request]:
        """Return the redirect target of *response* with any ``Cookie`` header removed.

        Used for ``omit`` mode, where redirects are followed by hand so the
        client's cookie jar never contributes to a hop.
        """
        next_request = response.next_request
        if next_request is None:
            return None
        if hops >= client.max_redirects:
            raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=next_request)
        next_request.headers.pop("Cookie", None)
        logger.debug("Following redirect to %s without cookies", next_request.url)
        return next_request

    def _parse_response(self, operation: GraphQLOperation, response: httpx.Response) -> Any:
        """Map error statuses to exceptions and return the decoded JSON body."""
        status = response.status_code
        if status >= 400:
            raise self._status_error(response)

        try:
            body = response.json()
        except ValueError as exc:
            raise ResponseDecodeError(
                f"Response from {self._profile.endpoint} is not valid JSON: {exc}",
                status_code=status,
            ) from exc

        self._dispatch_hook(HookEvent.AFTER_RESPONSE, operation, body)
        return body

    def _status_error(self, response: httpx.Response) -> TransportError:
        status = response.status_code
        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("message") or detail.get("error") or ""
                if not msg and isinstance(detail.get("errors"), list) and detail["errors"]:
                    first = detail["errors"][0]
                    msg = first.get("message", "") if isinstance(first, dict) else str(first)
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        full_msg = f"HTTP {status}: {msg}" if msg else f"HTTP {status}"
        if status in (401, 403):
            return AuthError(full_msg, status_code=status)
        if status == 404:
            return NotFoundError(full_msg, status_code=status)
        return ServerError(full_msg, status_code=status)

    def _fail(self, operation: GraphQLOperation, error: TransportError) -> TransportError:
        logger.warning("GraphQL request to %s failed: %s", self._profile.endpoint, error)
        self._dispatch_hook(HookEvent.REQUEST_ERROR, operation, error)
        return error

    def _dispatch_hook(self, event: HookEvent, *args: Any) -> None:
        if self._hooks is not None:
            self._hooks.dispatch(event, *args)
