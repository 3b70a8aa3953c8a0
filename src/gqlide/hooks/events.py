"""Well-known lifecycle events and the payload each one carries.

Listeners receive the positional arguments listed next to each event.
Extensions are free to dispatch their own event names; these are only the
ones the core itself emits.
"""

from __future__ import annotations

from enum import Enum

from gqlide.models import ExtensionKind


class HookEvent(str, Enum):
    """Names of the events emitted by the editor core.

    ================================  ==========================================
    Event                             Arguments
    ================================  ==========================================
    ``after_register_toolbar_button`` ``(name, config, priority)``
    ``toolbar_button_register_error`` ``(name, config, priority, error)``
    ``after_register_activity_panel`` ``(name, config, priority)``
    ``activity_panel_register_error`` ``(name, config, priority, error)``
    ``before_render``                 ``(boot_context,)``
    ``hook_error``                    ``(event_name, args, error)``
    ``before_request``                ``(operation, credential_mode)``
    ``after_response``                ``(operation, body)``
    ``request_error``                 ``(operation, error)``
    ``schema_changed``                ``(schema,)``
    ``auth_mode_changed``             ``(is_authenticated,)``
    ================================  ==========================================
    """

    AFTER_REGISTER_TOOLBAR_BUTTON = "after_register_toolbar_button"
    TOOLBAR_BUTTON_REGISTER_ERROR = "toolbar_button_register_error"
    AFTER_REGISTER_ACTIVITY_PANEL = "after_register_activity_panel"
    ACTIVITY_PANEL_REGISTER_ERROR = "activity_panel_register_error"
    BEFORE_RENDER = "before_render"
    HOOK_ERROR = "hook_error"
    BEFORE_REQUEST = "before_request"
    AFTER_RESPONSE = "after_response"
    REQUEST_ERROR = "request_error"
    SCHEMA_CHANGED = "schema_changed"
    AUTH_MODE_CHANGED = "auth_mode_changed"


def after_register_event(kind: ExtensionKind) -> str:
    """Return the success event name for *kind*, e.g. ``after_register_toolbar_button``."""
    return f"after_register_{kind.value}"


def register_error_event(kind: ExtensionKind) -> str:
    """Return the failure event name for *kind*, e.g. ``toolbar_button_register_error``."""
    return f"{kind.value}_register_error"
