"""Editor state: actions, the pure reducer, selectors and the store.

Example::

    from gqlide.state import SetSchema, Store

    store = Store()
    store.dispatch(SetSchema(schema))
    store.dispatch(SetSchema(schema))  # same reference: no change, no notification
"""

from gqlide.state.actions import (
    Action,
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
from gqlide.state.reducer import SCHEMA_UNSET, EditorState, create_initial_state, reduce
from gqlide.state.store import Store

__all__ = [
    "Action",
    "EditorState",
    "RegisterExtension",
    "SCHEMA_UNSET",
    "SetAuthenticated",
    "SetDrawerOpen",
    "SetInitialStateLoaded",
    "SetIsFetching",
    "SetQuery",
    "SetRenderStandalone",
    "SetSchema",
    "Store",
    "ToggleAuthenticated",
    "create_initial_state",
    "reduce",
]
