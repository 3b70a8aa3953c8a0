"""Abstract base class for credential providers.

This module defines the two foundational types of the credential subsystem:

- :class:`CredentialResult` -- the headers and cookies a provider produces.
- :class:`CredentialProvider` -- the abstract base class every credential
  strategy extends.

A provider only builds credentials. Whether they are attached to a given
request is decided by the request dispatcher's credential mode.

See Also:
    :mod:`gqlide.auth.manager` for provider registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from gqlide.models import CredentialConfig


class CredentialResult:
    """Headers and cookies to attach to an outgoing request.

    Example::

        result = CredentialResult(headers={"Authorization": "Bearer tok123"})
        assert not result.is_empty()
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
    ):
        self.headers = headers or {}
        self.cookies = cookies or {}

    def is_empty(self) -> bool:
        return not self.headers and not self.cookies

    def merged_with(self, other: CredentialResult) -> CredentialResult:
        """Return a new result where *other*'s values win on conflicts."""
        return CredentialResult(
            headers={**self.headers, **other.headers},
            cookies={**self.cookies, **other.cookies},
        )


class CredentialProvider(ABC):
    """Abstract base class for credential providers.

    Subclasses provide a :attr:`credential_type` (e.g. ``"basic"``) and an
    :meth:`authenticate` implementation. Providers are registered with
    :class:`~gqlide.auth.manager.CredentialManager` and looked up by type.
    """

    @property
    @abstractmethod
    def credential_type(self) -> str:
        """Return the unique credential type this provider handles."""
        ...

    @abstractmethod
    def authenticate(self, config: CredentialConfig) -> CredentialResult:
        """Resolve the configured secret and return what to attach.

        Raises:
            AuthError: If the credential cannot be resolved or is malformed.
        """
        ...

    def validate_config(self, config: CredentialConfig) -> list[str]:
        """Return human-readable problems with *config*; empty when valid."""
        return []
