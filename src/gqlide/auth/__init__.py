"""Pluggable credentials for outgoing GraphQL requests.

- :class:`CredentialProvider` -- abstract base class for credential strategies.
- :class:`CredentialManager` -- maps credential types to providers.
- :func:`create_default_manager` -- a manager with all built-in providers.

Typical usage::

    from gqlide.auth import create_default_manager

    manager = create_default_manager()
    result = manager.authenticate(profile.session_auth)
"""

from gqlide.auth.base import CredentialProvider, CredentialResult
from gqlide.auth.manager import CredentialManager, create_default_manager

__all__ = [
    "CredentialManager",
    "CredentialProvider",
    "CredentialResult",
    "create_default_manager",
]
