"""Read accessors over :class:`~gqlide.state.reducer.EditorState`.

These are pure functions of the state. ``get_extensions_list`` follows the
insertion order of the store's mapping; callers that need priority order
read :meth:`~gqlide.extensions.registry.ExtensionRegistry.get_sorted`
instead.
"""

from __future__ import annotations

from typing import Any, Optional

from gqlide.state.reducer import SCHEMA_UNSET, EditorState


def get_query(state: EditorState) -> Optional[str]:
    return state.query


def get_schema(state: EditorState) -> Any:
    return state.schema


def has_schema(state: EditorState) -> bool:
    """True when a schema is loaded (neither never set nor invalidated)."""
    return state.schema is not SCHEMA_UNSET and state.schema is not None


def is_schema_invalidated(state: EditorState) -> bool:
    """True after an explicit ``SetSchema(None)``, False if the schema was never set."""
    return state.schema is None


def is_drawer_open(state: EditorState) -> bool:
    return state.is_drawer_open


def should_render_standalone(state: EditorState) -> bool:
    return state.should_render_standalone


def is_initial_state_loaded(state: EditorState) -> bool:
    return state.is_initial_state_loaded


def is_fetching(state: EditorState) -> bool:
    return state.is_fetching


def is_blocked_by_fetch(state: EditorState) -> bool:
    """Whether a new operation should wait because one is already in flight."""
    return state.is_fetching


def is_authenticated(state: EditorState) -> bool:
    return state.is_authenticated


def get_extensions_list(state: EditorState) -> list[Any]:
    """Flatten the registered extension configs in insertion order."""
    return list(state.registered_extensions.values())
