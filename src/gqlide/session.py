"""Editor session: ties the store, the hook bus and the request dispatcher together.

:class:`EditorSession` is what a front end (or the CLI) drives. It owns no
state of its own; every change goes through the context's
:class:`~gqlide.state.store.Store` and every lifecycle event through its
:class:`~gqlide.hooks.bus.HookBus`.

Request lifecycle::

    idle --fetch()--> in flight (is_fetching=True)
    in flight --response or error--> idle (is_fetching=False)

Overlapping fetches are neither serialised nor cancelled; the first one to
finish clears ``is_fetching``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from graphql import (
    GraphQLError,
    GraphQLSchema,
    build_client_schema,
    get_introspection_query,
    parse,
    print_ast,
)

from gqlide import __version__
from gqlide.client.async_dispatcher import AsyncRequestDispatcher
from gqlide.config import save_auth_preference
from gqlide.context import EditorContext
from gqlide.exceptions import ExtensionError, ResponseDecodeError
from gqlide.hooks.events import HookEvent
from gqlide.models import BootContext, ExtensionKind, GraphQLOperation, Profile
from gqlide.state import selectors
from gqlide.state.actions import (
    SetAuthenticated,
    SetDrawerOpen,
    SetInitialStateLoaded,
    SetIsFetching,
    SetQuery,
    SetRenderStandalone,
    SetSchema,
    ToggleAuthenticated,
)
from gqlide.state.reducer import EditorState

logger = logging.getLogger(__name__)


def build_boot_context(profile: Profile, version: str = __version__) -> BootContext:
    """Assemble the read-only boot data for *profile*."""
    return BootContext(
        version=version,
        endpoint=profile.endpoint,
        display_name=profile.display_name,
        avatar_url=profile.avatar_url,
        external_fragments=list(profile.external_fragments),
        feature_flags=dict(profile.feature_flags),
    )


class EditorSession:
    """Drives one editor instance.

    Args:
        context: The editor context whose store and hooks are used.
        dispatcher: An entered :class:`AsyncRequestDispatcher`.
        persist_auth: Whether :meth:`toggle_auth` and
            :meth:`set_authenticated` write the preference to local storage.
    """

    def __init__(
        self,
        context: EditorContext,
        dispatcher: AsyncRequestDispatcher,
        persist_auth: bool = True,
    ) -> None:
        self.context = context
        self.dispatcher = dispatcher
        self._persist_auth = persist_auth

    @property
    def state(self) -> EditorState:
        return self.context.store.state

    # --- Boot ---

    def boot(self, boot_context: BootContext, should_render_standalone: bool = False) -> None:
        """Run the boot sequence.

        The standalone flag is stored, ``before_render`` is fired with
        *boot_context* so extensions can register their contributions, and
        only then is the initial state marked as loaded.
        """
        store = self.context.store
        store.dispatch(SetRenderStandalone(should_render_standalone))
        self.context.hooks.dispatch(HookEvent.BEFORE_RENDER, boot_context)
        store.dispatch(SetInitialStateLoaded())
        logger.debug("Editor booted against %s", boot_context.endpoint)

    # --- Requests ---

    async def fetch(self, operation: GraphQLOperation) -> Any:
        """Execute *operation* with the session's current auth mode.

        ``is_fetching`` is raised for the duration of the call and lowered
        again whether the request succeeds or fails. Transport errors
        propagate unchanged.
        """
        store = self.context.store
        store.dispatch(SetIsFetching(True))
        try:
            return await self.dispatcher.execute(
                operation, is_authenticated=selectors.is_authenticated(store.state)
            )
        finally:
            store.dispatch(SetIsFetching(False))

    async def refresh_schema(self) -> GraphQLSchema:
        """Invalidate the current schema, introspect the endpoint and store the result.

        Raises:
            TransportError: If the introspection request fails.
            ResponseDecodeError: If the response holds no usable
                introspection data.
        """
        store = self.context.store
        store.dispatch(SetSchema(None))

        body = await self.fetch(
            GraphQLOperation(query=get_introspection_query(), operation_name="IntrospectionQuery")
        )
        data = body.get("data") if isinstance(body, dict) else None
        if not data:
            raise ResponseDecodeError("Introspection response carries no data")
        try:
            schema = build_client_schema(data)
        except (TypeError, GraphQLError) as exc:
            raise ResponseDecodeError(f"Invalid introspection result: {exc}") from exc

        previous = store.state
        if store.dispatch(SetSchema(schema)) is not previous:
            self.context.hooks.dispatch(HookEvent.SCHEMA_CHANGED, schema)
        return schema

    # --- Editor state ---

    def set_query(self, query: Optional[str]) -> None:
        self.context.store.dispatch(SetQuery(query))

    def open_drawer(self) -> None:
        self.context.store.dispatch(SetDrawerOpen(True))

    def close_drawer(self) -> None:
        self.context.store.dispatch(SetDrawerOpen(False))

    def prettify_query(self) -> Optional[str]:
        """Reformat the current query in place.

        Returns the formatted document, or ``None`` when there is no query
        or it does not parse (the query is then left untouched).
        """
        query = selectors.get_query(self.state)
        if not query:
            return None
        try:
            formatted = print_ast(parse(query))
        except GraphQLError as exc:
            logger.warning("Cannot prettify query: %s", exc)
            return None
        self.set_query(formatted)
        return formatted

    # --- Auth toggle ---

    def toggle_auth(self) -> bool:
        """Flip between authenticated and public mode and return the new mode."""
        self.context.store.dispatch(ToggleAuthenticated())
        return self._auth_changed()

    def set_authenticated(self, is_authenticated: bool) -> bool:
        """Switch to the given mode; a no-op when already in it."""
        if selectors.is_authenticated(self.state) == is_authenticated:
            return is_authenticated
        self.context.store.dispatch(SetAuthenticated(is_authenticated))
        return self._auth_changed()

    def _auth_changed(self) -> bool:
        value = selectors.is_authenticated(self.state)
        if self._persist_auth:
            save_auth_preference(value)
        self.context.hooks.dispatch(HookEvent.AUTH_MODE_CHANGED, value)
        return value

    # --- Toolbar ---

    def run_toolbar_button(self, name: str) -> Any:
        """Invoke the command of the toolbar button registered as *name*.

        Raises:
            ExtensionError: If no such button exists or it has no command.
        """
        config = self.context.registry.get(ExtensionKind.TOOLBAR_BUTTON, name)
        if config is None:
            raise ExtensionError(f"No toolbar button named '{name}'")
        if config.command is None:
            raise ExtensionError(f"Toolbar button '{name}' has no command")
        return config.command(self)
