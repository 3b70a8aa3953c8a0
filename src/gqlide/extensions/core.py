"""Contributions every editor ships with.

Toolbar button commands are called with the
:class:`~gqlide.session.EditorSession` that runs them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from gqlide.extensions.api import register_activity_panel, register_toolbar_button
from gqlide.models import ActivityPanelConfig, ToolbarButtonConfig
from gqlide.state import selectors

if TYPE_CHECKING:
    from gqlide.context import EditorContext
    from gqlide.session import EditorSession
    from gqlide.state.reducer import EditorState

AUTH_BUTTON_CLASS = "graphiql-toggle-auth-button"

HELP_LINKS = {
    "GraphQL documentation": "https://graphql.org/learn/",
    "GraphiQL": "https://github.com/graphql/graphiql",
}


def _prettify(session: EditorSession) -> Optional[str]:
    return session.prettify_query()


def _copy_query(session: EditorSession) -> Optional[str]:
    return selectors.get_query(session.state)


def _toggle_auth(session: EditorSession) -> bool:
    return session.toggle_auth()


def auth_state_class(state: EditorState) -> str:
    return "is-authenticated" if selectors.is_authenticated(state) else "is-public"


def _help_content() -> dict[str, Any]:
    return {"links": dict(HELP_LINKS)}


def register_core_extensions(context: EditorContext) -> None:
    """Register the built-in toolbar buttons and activity panels on *context*."""
    register_toolbar_button(
        context,
        "prettify",
        ToolbarButtonConfig(
            label="Prettify",
            title="Prettify query (Shift-Ctrl-P)",
            icon="prettify",
            command=_prettify,
        ),
        priority=1,
    )
    register_toolbar_button(
        context,
        "copy-query",
        ToolbarButtonConfig(
            label="Copy",
            title="Copy query (Shift-Ctrl-C)",
            icon="copy",
            command=_copy_query,
        ),
        priority=2,
    )
    register_toolbar_button(
        context,
        "toggle-auth",
        ToolbarButtonConfig(
            label="Toggle auth",
            title="Switch between authenticated and public requests",
            icon="user",
            css_class=AUTH_BUTTON_CLASS,
            state_class=auth_state_class,
            command=_toggle_auth,
        ),
    )

    register_activity_panel(
        context,
        "help",
        ActivityPanelConfig(title="Help", icon="help", content=_help_content),
        priority=5,
    )
    register_activity_panel(
        context,
        "query-composer",
        ActivityPanelConfig(title="Query Composer", icon="compose"),
    )
