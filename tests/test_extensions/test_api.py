"""Tests for the public registration functions and the built-in contributions."""

from __future__ import annotations

from gqlide.context import EditorContext
from gqlide.extensions import (
    register_activity_panel,
    register_core_extensions,
    register_toolbar_button,
)
from gqlide.hooks import HookEvent
from gqlide.models import ExtensionKind
from gqlide.state.actions import SetAuthenticated
from gqlide.state.selectors import get_extensions_list


class TestRegisterToolbarButton:
    def test_registers_in_registry(self, editor_context: EditorContext) -> None:
        register_toolbar_button(editor_context, "run", {"label": "Run"}, priority=1)

        assert editor_context.registry.get(ExtensionKind.TOOLBAR_BUTTON, "run").label == "Run"

    def test_not_mirrored_into_store(self, editor_context: EditorContext) -> None:
        register_toolbar_button(editor_context, "run", {"label": "Run"})

        assert get_extensions_list(editor_context.store.state) == []


class TestRegisterActivityPanel:
    def test_mirrored_into_store(self, editor_context: EditorContext) -> None:
        register_activity_panel(editor_context, "history", {"title": "History"})

        extensions = get_extensions_list(editor_context.store.state)
        assert [config.title for config in extensions] == ["History"]

    def test_failed_registration_changes_nothing(self, editor_context: EditorContext) -> None:
        errors: list[str] = []
        editor_context.hooks.subscribe(
            HookEvent.ACTIVITY_PANEL_REGISTER_ERROR, lambda name, *rest: errors.append(name)
        )
        before = editor_context.store.state

        register_activity_panel(editor_context, "broken", {"icon": "no-title"})

        assert errors == ["broken"]
        assert editor_context.store.state is before

    def test_failed_overwrite_keeps_store_entry(self, editor_context: EditorContext) -> None:
        register_activity_panel(editor_context, "history", {"title": "History"})
        state = editor_context.store.state

        register_activity_panel(editor_context, "history", {"title": None})

        assert editor_context.store.state is state

    def test_overwrite_updates_store(self, editor_context: EditorContext) -> None:
        register_activity_panel(editor_context, "history", {"title": "History"})
        register_activity_panel(editor_context, "history", {"title": "Recent"})

        extensions = get_extensions_list(editor_context.store.state)
        assert [config.title for config in extensions] == ["Recent"]


class TestCoreExtensions:
    def test_toolbar_order(self, editor_context: EditorContext) -> None:
        register_core_extensions(editor_context)

        names = [e.name for e in editor_context.registry.get_entries(ExtensionKind.TOOLBAR_BUTTON)]
        assert names == ["prettify", "copy-query", "toggle-auth"]

    def test_panels(self, editor_context: EditorContext) -> None:
        register_core_extensions(editor_context)

        names = [e.name for e in editor_context.registry.get_entries(ExtensionKind.ACTIVITY_PANEL)]
        assert names == ["help", "query-composer"]
        assert len(get_extensions_list(editor_context.store.state)) == 2

    def test_third_party_can_slot_between_core_buttons(self, editor_context: EditorContext) -> None:
        register_core_extensions(editor_context)
        register_toolbar_button(editor_context, "share", {"label": "Share"}, priority=2)

        names = [e.name for e in editor_context.registry.get_entries(ExtensionKind.TOOLBAR_BUTTON)]
        assert names == ["prettify", "copy-query", "share", "toggle-auth"]

    def test_auth_button_class_follows_auth_mode(self, editor_context: EditorContext) -> None:
        register_core_extensions(editor_context)
        button = editor_context.registry.get(ExtensionKind.TOOLBAR_BUTTON, "toggle-auth")

        editor_context.store.dispatch(SetAuthenticated(True))
        assert button.classes_for(editor_context.store.state) == (
            "graphiql-toggle-auth-button is-authenticated"
        )

        editor_context.store.dispatch(SetAuthenticated(False))
        assert button.classes_for(editor_context.store.state) == (
            "graphiql-toggle-auth-button is-public"
        )

    def test_plain_button_classes(self, editor_context: EditorContext) -> None:
        register_toolbar_button(editor_context, "share", {"label": "Share", "css_class": "share"})
        button = editor_context.registry.get(ExtensionKind.TOOLBAR_BUTTON, "share")

        assert button.classes_for(editor_context.store.state) == "share"
