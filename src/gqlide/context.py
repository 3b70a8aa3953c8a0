"""The editor context: the single object extensions and commands receive.

An :class:`EditorContext` bundles the hook bus, the extension registry and
the state store of one editor instance. Nothing in gqlide is a module-level
singleton; tests and embedders build as many contexts as they need with
:func:`create_context`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gqlide.config import load_auth_preference
from gqlide.extensions.registry import ExtensionRegistry
from gqlide.hooks.bus import HookBus
from gqlide.models import Profile
from gqlide.state.reducer import create_initial_state
from gqlide.state.store import Store


@dataclass
class EditorContext:
    """Hook bus, registry and store of one editor instance.

    ``registry.hooks`` is always the same bus as ``hooks``.
    """

    hooks: HookBus
    registry: ExtensionRegistry
    store: Store
    profile: Optional[Profile] = None


def create_context(
    profile: Optional[Profile] = None,
    is_authenticated: Optional[bool] = None,
    should_render_standalone: bool = False,
) -> EditorContext:
    """Build a fresh context.

    Args:
        profile: The active endpoint profile, if any.
        is_authenticated: Initial auth toggle. ``None`` reads the persisted
            preference (authenticated when nothing was saved).
        should_render_standalone: Initial standalone flag.
    """
    if is_authenticated is None:
        is_authenticated = load_auth_preference()

    hooks = HookBus()
    store = Store(
        create_initial_state(
            is_authenticated=is_authenticated,
            should_render_standalone=should_render_standalone,
        )
    )
    return EditorContext(
        hooks=hooks,
        registry=ExtensionRegistry(hooks),
        store=store,
        profile=profile,
    )
