"""Built-in credential providers.

* ``basic`` -- ``username:password`` sent as ``Authorization: Basic`` (:rfc:`7617`).
* ``bearer`` -- a token sent as ``Authorization: Bearer`` or a custom header.
* ``cookie`` -- a session cookie such as a logged-in cookie.
* ``none`` -- attaches nothing.
"""

from __future__ import annotations

import base64

from gqlide.auth.base import CredentialProvider, CredentialResult
from gqlide.config import resolve_credential
from gqlide.exceptions import AuthError, ConfigError
from gqlide.models import CredentialConfig


def _resolve(config: CredentialConfig) -> str:
    try:
        return resolve_credential(config.source)
    except ConfigError as exc:
        raise AuthError(f"Cannot resolve {config.type} credential: {exc}") from exc


class BasicCredentialProvider(CredentialProvider):
    """HTTP Basic authentication from a ``username:password`` credential."""

    @property
    def credential_type(self) -> str:
        return "basic"

    def authenticate(self, config: CredentialConfig) -> CredentialResult:
        raw = _resolve(config)
        if ":" not in raw:
            raise AuthError(
                "Basic auth credential must be in 'username:password' format "
                "(colon separator is required)"
            )
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return CredentialResult(headers={"Authorization": f"Basic {encoded}"})

    def validate_config(self, config: CredentialConfig) -> list[str]:
        errors: list[str] = []
        if not config.source:
            errors.append("Basic auth requires a 'source' for the credential")
        return errors


class BearerCredentialProvider(CredentialProvider):
    """A static token, sent as ``Authorization: Bearer <token>`` by default.

    When ``header`` is set the raw token is sent in that header instead.
    """

    @property
    def credential_type(self) -> str:
        return "bearer"

    def authenticate(self, config: CredentialConfig) -> CredentialResult:
        token = _resolve(config)
        if config.header:
            return CredentialResult(headers={config.header: token})
        return CredentialResult(headers={"Authorization": f"Bearer {token}"})


class CookieCredentialProvider(CredentialProvider):
    """A named session cookie."""

    @property
    def credential_type(self) -> str:
        return "cookie"

    def authenticate(self, config: CredentialConfig) -> CredentialResult:
        if not config.cookie_name:
            raise AuthError("Cookie credentials require a 'cookie_name'")
        return CredentialResult(cookies={config.cookie_name: _resolve(config)})

    def validate_config(self, config: CredentialConfig) -> list[str]:
        errors: list[str] = []
        if not config.cookie_name:
            errors.append("Cookie credentials require a 'cookie_name'")
        return errors


class NoCredentialProvider(CredentialProvider):
    @property
    def credential_type(self) -> str:
        return "none"

    def authenticate(self, config: CredentialConfig) -> CredentialResult:
        return CredentialResult()
