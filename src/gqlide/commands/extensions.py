"""Extensions command -- list toolbar buttons, activity panels and loaded extensions."""

from __future__ import annotations

import typer

from gqlide.commands._common import exit_on_error, open_editor
from gqlide.models import ExtensionKind
from gqlide.output import print_table


extensions_app = typer.Typer(no_args_is_help=True)


@extensions_app.command("list")
def extensions_list() -> None:
    """List every registered contribution in display order.

    Third-party extensions discovered through entry points are activated
    first so their contributions show up too.

    Example::

        gqlide extensions list --json
    """
    from gqlide.config import load_global_config

    with exit_on_error():
        config = load_global_config()
        context, manager = open_editor(config, None)

    rows: list[list[str]] = []
    try:
        for kind in ExtensionKind:
            for entry in context.registry.get_entries(kind):
                title = getattr(entry.config, "title", None) or getattr(entry.config, "label", "")
                rows.append([kind.value, entry.name, str(entry.priority), title or ""])

        for info in manager.list_extensions():
            rows.append(["extension", info["name"], "", info["description"] or info["version"]])
    finally:
        manager.cleanup()

    print_table(["Kind", "Name", "Priority", "Title"], rows, title="Extensions")
