"""Tests for the editor session: boot, fetch lifecycle, schema refresh and auth toggle."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest
from graphql import build_schema, get_introspection_query, graphql_sync

from gqlide.client import AsyncRequestDispatcher
from gqlide.config import load_auth_preference
from gqlide.context import EditorContext
from gqlide.exceptions import ExtensionError, ResponseDecodeError, ServerError
from gqlide.extensions import register_core_extensions
from gqlide.hooks import HookEvent
from gqlide.models import BootContext, CredentialMode, GraphQLOperation, Profile
from gqlide.session import EditorSession, build_boot_context
from gqlide.state import selectors

SDL = """
type Post { id: ID! title: String }
type Query { posts: [Post] }
"""


def _introspection_data() -> dict[str, Any]:
    return graphql_sync(build_schema(SDL), get_introspection_query()).data


class FakeDispatcher:
    """Records calls and answers from a queue of bodies or exceptions."""

    def __init__(self, *results: Any) -> None:
        self.results = list(results)
        self.calls: list[tuple[GraphQLOperation, bool]] = []
        self.states_seen: list[bool] = []
        self.store = None

    async def execute(self, operation: GraphQLOperation, is_authenticated: bool = True) -> Any:
        self.calls.append((operation, is_authenticated))
        if self.store is not None:
            self.states_seen.append(self.store.state.is_fetching)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _session(context: EditorContext, dispatcher: Any) -> EditorSession:
    if isinstance(dispatcher, FakeDispatcher):
        dispatcher.store = context.store
    return EditorSession(context, dispatcher)


class TestBuildBootContext:
    def test_from_profile(self, sample_profile: Profile) -> None:
        boot = build_boot_context(sample_profile, version="1.2.3")

        assert boot.version == "1.2.3"
        assert boot.endpoint == sample_profile.endpoint
        assert boot.display_name == "admin"
        assert boot.entry_point_label == "GraphiQL IDE"
        assert boot.feature_flags == {"query_composer": True}

    def test_read_only(self, sample_profile: Profile) -> None:
        boot = build_boot_context(sample_profile)

        with pytest.raises(Exception):
            boot.version = "9.9.9"  # type: ignore[misc]


class TestBoot:
    def test_before_render_runs_before_initial_state_loaded(
        self, editor_context: EditorContext, sample_profile: Profile
    ) -> None:
        seen: list[tuple[BootContext, bool]] = []
        editor_context.hooks.subscribe(
            HookEvent.BEFORE_RENDER,
            lambda boot: seen.append((boot, editor_context.store.state.is_initial_state_loaded)),
        )
        session = _session(editor_context, FakeDispatcher())
        boot = build_boot_context(sample_profile)

        session.boot(boot, should_render_standalone=True)

        assert seen == [(boot, False)]
        assert selectors.is_initial_state_loaded(session.state)
        assert selectors.should_render_standalone(session.state)

    def test_extensions_registered_during_boot_are_visible(
        self, editor_context: EditorContext, sample_profile: Profile
    ) -> None:
        editor_context.hooks.subscribe(
            HookEvent.BEFORE_RENDER, lambda boot: register_core_extensions(editor_context)
        )
        session = _session(editor_context, FakeDispatcher())

        session.boot(build_boot_context(sample_profile))

        assert len(selectors.get_extensions_list(session.state)) == 2


class TestFetch:
    def test_is_fetching_lifecycle(self, editor_context: EditorContext) -> None:
        dispatcher = FakeDispatcher({"data": {"posts": []}})
        session = _session(editor_context, dispatcher)

        body = asyncio.run(session.fetch(GraphQLOperation(query="{ posts { id } }")))

        assert body == {"data": {"posts": []}}
        assert dispatcher.states_seen == [True]
        assert not selectors.is_fetching(session.state)

    def test_is_fetching_cleared_on_error(self, editor_context: EditorContext) -> None:
        dispatcher = FakeDispatcher(ServerError("HTTP 500", status_code=500))
        session = _session(editor_context, dispatcher)

        with pytest.raises(ServerError):
            asyncio.run(session.fetch(GraphQLOperation(query="{ posts { id } }")))

        assert not selectors.is_fetching(session.state)

    def test_passes_auth_toggle(self, editor_context: EditorContext) -> None:
        dispatcher = FakeDispatcher({"data": {}}, {"data": {}})
        session = EditorSession(editor_context, dispatcher, persist_auth=False)

        asyncio.run(session.fetch(GraphQLOperation(query="{ a }")))
        session.toggle_auth()
        asyncio.run(session.fetch(GraphQLOperation(query="{ a }")))

        assert [authenticated for _, authenticated in dispatcher.calls] == [True, False]


class TestRefreshSchema:
    def test_stores_schema_and_fires_event(self, editor_context: EditorContext) -> None:
        changed: list[Any] = []
        editor_context.hooks.subscribe(HookEvent.SCHEMA_CHANGED, changed.append)
        session = _session(editor_context, FakeDispatcher({"data": _introspection_data()}))

        schema = asyncio.run(session.refresh_schema())

        assert selectors.get_schema(session.state) is schema
        assert schema.query_type.name == "Query"
        assert changed == [schema]

    def test_invalidates_before_fetching(self, editor_context: EditorContext) -> None:
        schemas: list[Any] = []
        editor_context.store.subscribe(lambda new, old: schemas.append(new.schema))
        session = _session(editor_context, FakeDispatcher(ServerError("HTTP 502")))

        with pytest.raises(ServerError):
            asyncio.run(session.refresh_schema())

        assert schemas[0] is None
        assert selectors.is_schema_invalidated(session.state)

    def test_rejects_body_without_data(self, editor_context: EditorContext) -> None:
        session = _session(editor_context, FakeDispatcher({"errors": [{"message": "denied"}]}))

        with pytest.raises(ResponseDecodeError):
            asyncio.run(session.refresh_schema())

    def test_introspection_is_authenticated_in_public_mode(
        self, isolated_config, sample_profile: Profile
    ) -> None:
        from gqlide.context import create_context

        context = create_context(sample_profile, is_authenticated=False)
        modes: list[CredentialMode] = []
        auth_headers: list[str] = []
        context.hooks.subscribe(HookEvent.BEFORE_REQUEST, lambda op, mode: modes.append(mode))

        def handler(request: httpx.Request) -> httpx.Response:
            auth_headers.append(request.headers["authorization"])
            return httpx.Response(200, json={"data": _introspection_data()})

        async def _main() -> None:
            async with AsyncRequestDispatcher(sample_profile, hooks=context.hooks) as dispatcher:
                await dispatcher._client.aclose()
                dispatcher._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
                await EditorSession(context, dispatcher, persist_auth=False).refresh_schema()

        asyncio.run(_main())

        assert modes == [CredentialMode.INCLUDE]
        assert auth_headers == ["Bearer session-token"]


class TestEditorCommands:
    def test_query_and_drawer(self, editor_context: EditorContext) -> None:
        session = _session(editor_context, FakeDispatcher())

        session.set_query("{ a }")
        session.open_drawer()
        assert selectors.get_query(session.state) == "{ a }"
        assert selectors.is_drawer_open(session.state)

        session.close_drawer()
        assert not selectors.is_drawer_open(session.state)

    def test_prettify(self, editor_context: EditorContext) -> None:
        session = _session(editor_context, FakeDispatcher())
        session.set_query("query{posts{id title}}")

        formatted = session.prettify_query()

        assert formatted == "{\n  posts {\n    id\n    title\n  }\n}"
        assert selectors.get_query(session.state) == formatted

    def test_prettify_leaves_invalid_query(self, editor_context: EditorContext) -> None:
        session = _session(editor_context, FakeDispatcher())
        session.set_query("query {")

        assert session.prettify_query() is None
        assert selectors.get_query(session.state) == "query {"

    def test_toggle_auth_persists_and_notifies(self, editor_context: EditorContext) -> None:
        modes: list[bool] = []
        editor_context.hooks.subscribe(HookEvent.AUTH_MODE_CHANGED, modes.append)
        session = _session(editor_context, FakeDispatcher())

        assert session.toggle_auth() is False
        assert load_auth_preference() is False
        assert session.toggle_auth() is True

        assert modes == [False, True]
        assert load_auth_preference() is True

    def test_set_authenticated_noop_when_unchanged(self, editor_context: EditorContext) -> None:
        modes: list[bool] = []
        editor_context.hooks.subscribe(HookEvent.AUTH_MODE_CHANGED, modes.append)
        session = _session(editor_context, FakeDispatcher())

        session.set_authenticated(True)
        session.set_authenticated(False)

        assert modes == [False]

    def test_run_toolbar_buttons(self, editor_context: EditorContext) -> None:
        register_core_extensions(editor_context)
        session = EditorSession(editor_context, FakeDispatcher(), persist_auth=False)
        session.set_query("{ a }")

        assert session.run_toolbar_button("copy-query") == "{ a }"
        assert session.run_toolbar_button("prettify") == "{\n  a\n}"
        assert session.run_toolbar_button("toggle-auth") is False

    def test_run_unknown_toolbar_button(self, editor_context: EditorContext) -> None:
        session = _session(editor_context, FakeDispatcher())

        with pytest.raises(ExtensionError):
            session.run_toolbar_button("missing")
