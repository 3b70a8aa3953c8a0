"""Editor state and the pure transition function over it.

:func:`reduce` never mutates its input. When an action has no effect the
very same state object is returned, so subscribers that compare states by
identity see no change.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from gqlide.state.actions import (
    RegisterExtension,
    SetAuthenticated,
    SetDrawerOpen,
    SetInitialStateLoaded,
    SetIsFetching,
    SetQuery,
    SetRenderStandalone,
    SetSchema,
    ToggleAuthenticated,
)


class _SchemaUnset:
    """Marker for a schema that has never been set."""

    _instance: Optional["_SchemaUnset"] = None

    def __new__(cls) -> "_SchemaUnset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SCHEMA_UNSET"

    def __bool__(self) -> bool:
        return False


SCHEMA_UNSET: Any = _SchemaUnset()
"""Initial value of :attr:`EditorState.schema`. Distinct from ``None``,
which means the schema was explicitly invalidated."""


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class EditorState:
    """Everything the editor shell renders from.

    Attributes:
        query: The current operation document, ``None`` when none is loaded.
        schema: :data:`SCHEMA_UNSET` until the first schema arrives,
            ``None`` after an explicit invalidation, otherwise the schema.
        is_drawer_open: Whether the drawer holding the editor is open.
        should_render_standalone: Set once at boot.
        is_initial_state_loaded: Latches to ``True`` and never resets.
        is_fetching: ``True`` while a request is in flight.
        is_authenticated: Drives the credential mode of ordinary operations.
        registered_extensions: Read-only name to config mapping in
            insertion order.
    """

    query: Optional[str] = None
    schema: Any = SCHEMA_UNSET
    is_drawer_open: bool = False
    should_render_standalone: bool = False
    is_initial_state_loaded: bool = False
    is_fetching: bool = False
    is_authenticated: bool = True
    registered_extensions: Mapping[str, Any] = field(default_factory=_empty_mapping)


def create_initial_state(
    is_authenticated: bool = True,
    should_render_standalone: bool = False,
) -> EditorState:
    """Build the state a new editor session starts from."""
    return EditorState(
        is_authenticated=is_authenticated,
        should_render_standalone=should_render_standalone,
    )


def reduce(state: EditorState, action: object) -> EditorState:
    """Return the state that results from applying *action* to *state*."""
    if isinstance(action, SetSchema):
        if action.schema is state.schema:
            return state
        return replace(state, schema=action.schema)

    if isinstance(action, SetQuery):
        return replace(state, query=action.query)

    if isinstance(action, SetDrawerOpen):
        return replace(state, is_drawer_open=action.is_drawer_open)

    if isinstance(action, SetRenderStandalone):
        return replace(state, should_render_standalone=action.should_render_standalone)

    if isinstance(action, SetInitialStateLoaded):
        if state.is_initial_state_loaded:
            return state
        return replace(state, is_initial_state_loaded=True)

    if isinstance(action, RegisterExtension):
        merged = dict(state.registered_extensions)
        merged[action.name] = action.config
        return replace(state, registered_extensions=MappingProxyType(merged))

    if isinstance(action, SetIsFetching):
        return replace(state, is_fetching=action.is_fetching)

    if isinstance(action, SetAuthenticated):
        return replace(state, is_authenticated=action.is_authenticated)

    if isinstance(action, ToggleAuthenticated):
        return replace(state, is_authenticated=not state.is_authenticated)

    return state
