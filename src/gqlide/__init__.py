"""gqlide -- the extensibility and state core of an embeddable GraphQL query editor.

This package provides the pieces an editor shell needs to let third-party
code contribute toolbar buttons and side panels, react to lifecycle
events, and keep editor state consistent across asynchronous schema
fetches and query executions.

Typical wiring::

    from gqlide.context import create_context
    from gqlide.session import EditorSession

    context = create_context(profile)
    session = EditorSession(context)
    session.boot(boot_context)
    result = await session.fetch(GraphQLOperation(query="{ viewer { name } }"))

Modules:
    app: Typer application factory and CLI entry point.
    context: The explicitly constructed context handed to extensions.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration, profiles and the persisted auth toggle.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    session: Orchestrates the store and the request dispatcher.
"""

__version__ = "0.1.0"
