"""Schema command -- introspect the endpoint and print its SDL."""

from __future__ import annotations

import typer
from graphql import GraphQLSchema, print_schema

from gqlide.commands._common import exit_on_error, open_editor, resolve_profile, run_session
from gqlide.output import print_code
from gqlide.session import EditorSession


def schema_command(ctx: typer.Context) -> None:
    """Fetch the schema via introspection and print it as SDL.

    Example::

        gqlide schema > schema.graphql
    """
    with exit_on_error():
        config, profile = resolve_profile(ctx)
        context, manager = open_editor(config, profile)

        async def _work(session: EditorSession) -> GraphQLSchema:
            return await session.refresh_schema()

        try:
            schema = run_session(context, _work)
        finally:
            manager.cleanup()

    print_code(print_schema(schema))
