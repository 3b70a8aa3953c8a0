"""Public registration functions handed to extension code.

These mirror the editor's documented entry points: a toolbar button or an
activity panel is registered with a name, a config and an optional
priority. Neither function ever raises; watch the
``<kind>_register_error`` hook to observe failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gqlide.hooks.bus import DEFAULT_PRIORITY
from gqlide.models import ExtensionKind
from gqlide.state.actions import RegisterExtension

if TYPE_CHECKING:
    from gqlide.context import EditorContext


def register_toolbar_button(
    context: EditorContext,
    name: str,
    config: Any,
    priority: int = DEFAULT_PRIORITY,
) -> None:
    """Register a document editor toolbar button.

    Args:
        context: The editor context.
        name: Unique button name; registering it again replaces the button.
        config: Button config (see :class:`~gqlide.models.ToolbarButtonConfig`).
        priority: Lower numbers render first. Defaults to ``10``.
    """
    context.registry.register(ExtensionKind.TOOLBAR_BUTTON, name, config, priority)


def register_activity_panel(
    context: EditorContext,
    name: str,
    config: Any,
    priority: int = DEFAULT_PRIORITY,
) -> None:
    """Register an activity bar panel.

    Successfully registered panels are also recorded in the store so that
    the store's flattened extension list offers them to the editor.
    """
    registry = context.registry
    before = registry.get(ExtensionKind.ACTIVITY_PANEL, name)
    registry.register(ExtensionKind.ACTIVITY_PANEL, name, config, priority)
    stored = registry.get(ExtensionKind.ACTIVITY_PANEL, name)
    if stored is not None and stored is not before:
        context.store.dispatch(RegisterExtension(name, stored))
