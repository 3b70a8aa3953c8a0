"""Request dispatching for gqlide.

Each outgoing operation is parsed and classified, given a credential mode,
and POSTed as JSON to the profile's endpoint. The decoded body is returned
unchanged; transport failures raise :class:`~gqlide.exceptions.TransportError`
subclasses. Nothing is retried or cached.

Classes:
    :class:`RequestDispatcher` -- blocking, backed by :class:`httpx.Client`.
    :class:`AsyncRequestDispatcher` -- non-blocking, backed by :class:`httpx.AsyncClient`.
"""

from gqlide.client.async_dispatcher import AsyncRequestDispatcher
from gqlide.client.classify import (
    INTROSPECTION_FIELDS,
    classify_operation,
    is_introspection_operation,
    select_credential_mode,
)
from gqlide.client.dispatcher import RequestDispatcher

__all__ = [
    "AsyncRequestDispatcher",
    "INTROSPECTION_FIELDS",
    "RequestDispatcher",
    "classify_operation",
    "is_introspection_operation",
    "select_credential_mode",
]
