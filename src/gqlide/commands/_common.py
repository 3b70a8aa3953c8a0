"""Helpers shared by the CLI commands: profile resolution, editor set-up and error exits."""

from __future__ import annotations

import asyncio
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterator, Optional, TypeVar

import typer

from gqlide.client.async_dispatcher import AsyncRequestDispatcher
from gqlide.context import EditorContext, create_context
from gqlide.exceptions import ConfigError, GqlideError, InvalidUsageError
from gqlide.extensions.core import register_core_extensions
from gqlide.extensions.manager import ExtensionManager
from gqlide.models import GlobalConfig, Profile
from gqlide.output import debug, error
from gqlide.session import EditorSession, build_boot_context

T = TypeVar("T")


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn a :class:`GqlideError` into an error message and its exit code."""
    try:
        yield
    except GqlideError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def resolve_profile(ctx: typer.Context) -> tuple[GlobalConfig, Profile]:
    """Resolve the active profile from ``--profile``/``--endpoint`` and the environment.

    Raises:
        ConfigError: If no profile or endpoint is configured anywhere.
    """
    from gqlide.config import resolve_config

    obj = ctx.obj or {}
    config, profile = resolve_config(obj.get("profile"), obj.get("endpoint"))
    if profile is None:
        raise ConfigError(
            "No GraphQL endpoint configured. Use --endpoint, set GQLIDE_ENDPOINT, "
            "or add a profile with 'gqlide profile add'."
        )
    debug(f"Using profile '{profile.name}' -> {profile.endpoint}")
    return config, profile


def open_editor(
    config: GlobalConfig,
    profile: Optional[Profile],
    is_authenticated: Optional[bool] = None,
) -> tuple[EditorContext, ExtensionManager]:
    """Create a context with the core contributions and every enabled extension."""
    context = create_context(profile, is_authenticated=is_authenticated)
    register_core_extensions(context)
    manager = ExtensionManager()
    loaded = manager.discover(config, context)
    if loaded:
        debug(f"Loaded extensions: {', '.join(loaded)}")
    return context, manager


def run_session(
    context: EditorContext,
    work: Callable[[EditorSession], Awaitable[T]],
) -> T:
    """Boot an :class:`EditorSession` on a fresh dispatcher and run *work* in it.

    The CLI never persists the auth toggle as a side effect of a request.
    """
    profile = context.profile
    assert profile is not None

    async def _run() -> T:
        async with AsyncRequestDispatcher(profile, hooks=context.hooks) as dispatcher:
            session = EditorSession(context, dispatcher, persist_auth=False)
            session.boot(build_boot_context(profile))
            return await work(session)

    return asyncio.run(_run())


def read_document(value: str) -> str:
    """Return *value*, the contents of ``@path``, or stdin for ``-``."""
    if value == "-":
        return sys.stdin.read()
    if value.startswith("@"):
        path = Path(value[1:]).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise InvalidUsageError(f"Cannot read {path}: {exc}") from exc
    return value


def parse_variables(value: Optional[str]) -> Optional[dict[str, Any]]:
    """Parse ``--variables`` (inline JSON or ``@file``) into a dict.

    Raises:
        InvalidUsageError: If the value is not a JSON object.
    """
    import json

    if value is None:
        return None
    text = read_document(value)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"Variables are not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise InvalidUsageError("Variables must be a JSON object")
    return parsed
