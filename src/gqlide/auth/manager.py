"""Credential manager -- registry and dispatcher for credential providers.

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with every built-in provider.
"""

from __future__ import annotations

from typing import Optional

from gqlide.auth.base import CredentialProvider, CredentialResult
from gqlide.exceptions import AuthError
from gqlide.models import CredentialConfig


class CredentialManager:
    """Registry of credential providers keyed by :attr:`~CredentialProvider.credential_type`.

    Example::

        manager = create_default_manager()
        result = manager.authenticate(profile.transport_auth)
    """

    def __init__(self) -> None:
        self._providers: dict[str, CredentialProvider] = {}

    def register(self, provider: CredentialProvider) -> None:
        """Register *provider*, replacing any provider of the same type."""
        self._providers[provider.credential_type] = provider

    def get_provider(self, credential_type: str) -> CredentialProvider:
        """Return the provider registered for *credential_type*.

        Raises:
            AuthError: If no provider is registered for *credential_type*.
        """
        provider = self._providers.get(credential_type)
        if provider is None:
            available = ", ".join(sorted(self._providers)) or "(none)"
            raise AuthError(
                f"No credential provider registered for type '{credential_type}'. "
                f"Available types: {available}"
            )
        return provider

    def authenticate(self, config: Optional[CredentialConfig]) -> CredentialResult:
        """Build credentials for *config*; an empty result when *config* is ``None``."""
        if config is None:
            return CredentialResult()
        return self.get_provider(config.type).authenticate(config)

    def list_types(self) -> list[str]:
        return sorted(self._providers.keys())


def create_default_manager() -> CredentialManager:
    """Create a :class:`CredentialManager` with the ``basic``, ``bearer``,
    ``cookie`` and ``none`` providers registered."""
    from gqlide.auth.providers import (
        BasicCredentialProvider,
        BearerCredentialProvider,
        CookieCredentialProvider,
        NoCredentialProvider,
    )

    manager = CredentialManager()
    manager.register(BasicCredentialProvider())
    manager.register(BearerCredentialProvider())
    manager.register(CookieCredentialProvider())
    manager.register(NoCredentialProvider())
    return manager
