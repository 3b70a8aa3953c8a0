"""Canonical Pydantic models shared across all gqlide modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`CredentialConfig`, :class:`RequestConfig`, :class:`OutputConfig`,
    :class:`ExtensionsConfig`, :class:`GlobalConfig`, and :class:`Profile`.

**Extension contribution models** -- the per-kind payloads accepted by the
extension registry:
    :class:`ExtensionKind`, :class:`ToolbarButtonConfig`,
    :class:`ActivityPanelConfig`, and :class:`ExtensionEntry`.

**Request models** -- what flows through the request dispatcher and the
boot sequence:
    :class:`CredentialMode`, :class:`GraphQLOperation`, and
    :class:`BootContext`.

Models that accept extension-defined keys use ``extra="allow"`` so that
unknown keys are preserved in ``model_extra``.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Credential Config ---


class CredentialConfig(BaseModel):
    """How a credential is built for outgoing requests.

    The ``type`` field selects the credential provider (``basic``,
    ``bearer``, ``cookie``, ``none``); ``source`` says where the secret
    comes from. Providers may read extra keys through ``model_extra``.

    Example::

        CredentialConfig(type="basic", source="env:STAGING_BASIC_AUTH")
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Credential type: basic, bearer, cookie, none")
    source: str = Field(
        default="prompt",
        description="Credential source: env:VAR, file:/path, prompt, value:LITERAL",
    )
    header: Optional[str] = Field(
        default=None, description="Header name override for bearer credentials"
    )
    cookie_name: Optional[str] = Field(
        default=None, description="Cookie name for cookie credentials"
    )


class RequestConfig(BaseModel):
    """HTTP settings applied to every GraphQL request of a profile."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class ExtensionsConfig(BaseModel):
    """Explicit extension allow/deny lists stored in :class:`GlobalConfig`."""

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/gqlide/config.json``.

    See :func:`~gqlide.config.resolve_config` for the precedence chain.
    """

    default_profile: Optional[str] = None
    auto_select_single_profile: bool = True
    output: OutputConfig = Field(default_factory=OutputConfig)
    extensions: ExtensionsConfig = Field(default_factory=ExtensionsConfig)


class Profile(BaseModel):
    """One GraphQL endpoint together with everything needed to talk to it.

    Two credential layers are kept apart:

    * ``session_auth`` is the user's session (cookie or token). It is only
      attached when the dispatcher selects :attr:`CredentialMode.INCLUDE`.
    * ``transport_auth`` is a deployment-level credential (for example a
      staging site's HTTP Basic password). It is attached to every request
      regardless of the credential mode.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    endpoint: str = Field(description="URL of the GraphQL endpoint")
    display_name: Optional[str] = Field(
        default=None, description="Name of the viewer shown in the editor"
    )
    avatar_url: Optional[str] = None
    session_auth: Optional[CredentialConfig] = None
    transport_auth: Optional[CredentialConfig] = None
    request: RequestConfig = Field(default_factory=RequestConfig)
    external_fragments: list[str] = Field(
        default_factory=list, description="Query fragments offered to the editor"
    )
    feature_flags: dict[str, bool] = Field(default_factory=dict)


# --- Extension contributions ---


class ExtensionKind(str, enum.Enum):
    """The kinds of UI affordance an extension can contribute."""

    TOOLBAR_BUTTON = "toolbar_button"
    ACTIVITY_PANEL = "activity_panel"


class ToolbarButtonConfig(BaseModel):
    """A button shown in the document editor toolbar.

    ``command`` is called with the editor context when the button is
    activated. ``state_class`` maps the current editor state to extra CSS
    classes, for buttons that render differently per mode. Extensions may
    attach any further keys.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    kind: Literal["toolbar_button"] = "toolbar_button"
    label: str
    title: Optional[str] = None
    icon: Optional[str] = None
    css_class: Optional[str] = None
    state_class: Optional[Callable[[Any], str]] = None
    command: Optional[Callable[..., Any]] = None

    def classes_for(self, state: Any) -> str:
        """Return ``css_class`` plus whatever ``state_class`` adds for *state*."""
        classes = [self.css_class or ""]
        if self.state_class is not None:
            classes.append(self.state_class(state))
        return " ".join(c for c in classes if c)


class ActivityPanelConfig(BaseModel):
    """A side panel reachable from the activity bar."""

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    kind: Literal["activity_panel"] = "activity_panel"
    title: str
    icon: Optional[str] = None
    content: Any = None


ExtensionConfig = Union[ToolbarButtonConfig, ActivityPanelConfig]

CONFIG_MODELS: dict[ExtensionKind, type[BaseModel]] = {
    ExtensionKind.TOOLBAR_BUTTON: ToolbarButtonConfig,
    ExtensionKind.ACTIVITY_PANEL: ActivityPanelConfig,
}
"""Maps each :class:`ExtensionKind` to the model that validates its payloads."""


class ExtensionEntry(BaseModel):
    """A stored contribution inside the extension registry.

    ``sequence`` records when the ``(kind, name)`` key was first registered
    and is the tie-break between equal priorities. Re-registering the key
    keeps the original sequence.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ExtensionKind
    name: str
    config: Any
    priority: int = 10
    sequence: int = 0


# --- Request models ---


class CredentialMode(str, enum.Enum):
    """Whether an outgoing request carries session credentials."""

    INCLUDE = "include"
    OMIT = "omit"


class GraphQLOperation(BaseModel):
    """A single GraphQL request as issued by the editor."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: Optional[dict[str, Any]] = None
    operation_name: Optional[str] = Field(default=None, alias="operationName")

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body ``{"query", "variables", "operationName"}``."""
        return {
            "query": self.query,
            "variables": self.variables,
            "operationName": self.operation_name,
        }


class BootContext(BaseModel):
    """Read-only data the host hands to the editor shell at boot.

    Fired with the ``before_render`` hook so extensions can adapt before
    the editor mounts.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    endpoint: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    entry_point_label: str = "GraphiQL IDE"
    external_fragments: list[str] = Field(default_factory=list)
    feature_flags: dict[str, bool] = Field(default_factory=dict)
