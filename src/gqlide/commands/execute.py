"""Execute command -- send one GraphQL operation to the active endpoint.

Typical usage::

    gqlide execute '{ viewer { name } }'
    gqlide execute @query.graphql --variables '{"first": 5}'
    gqlide --endpoint https://example.com/graphql execute - --public < q.graphql
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from gqlide.commands._common import (
    exit_on_error,
    open_editor,
    parse_variables,
    read_document,
    resolve_profile,
    run_session,
)
from gqlide.models import GraphQLOperation
from gqlide.session import EditorSession
from gqlide.output import format_response, warning


def execute_command(
    ctx: typer.Context,
    query: str = typer.Argument(help="Operation document, @file, or '-' for stdin."),
    variables: Optional[str] = typer.Option(
        None, "--variables", "-V", help="Variables as a JSON object or @file."
    ),
    operation_name: Optional[str] = typer.Option(
        None, "--operation-name", "-O", help="Operation to run from a multi-operation document."
    ),
    authenticated: Optional[bool] = typer.Option(
        None,
        "--authenticated/--public",
        help="Override the saved auth mode for this request only.",
    ),
) -> None:
    """Execute a GraphQL operation and print the response body.

    Introspection operations always carry credentials; everything else
    carries them only in authenticated mode.
    """
    with exit_on_error():
        document = read_document(query)
        operation = GraphQLOperation(
            query=document,
            variables=parse_variables(variables),
            operation_name=operation_name,
        )
        config, profile = resolve_profile(ctx)
        context, manager = open_editor(config, profile, is_authenticated=authenticated)

        async def _work(session: EditorSession) -> Any:
            session.set_query(document)
            return await session.fetch(operation)

        try:
            body = run_session(context, _work)
        finally:
            manager.cleanup()

    format_response(body)
    if isinstance(body, dict) and body.get("errors"):
        warning(f"Response contains {len(body['errors'])} GraphQL error(s).")
