"""Typer application and CLI entry point for gqlide.

The built-in sub-commands (``execute``, ``schema``, ``auth``,
``extensions``, ``config``, ``profile``) are attached when this module is
imported. :func:`main` is the console-script entry point declared in
``pyproject.toml``; it maps :class:`~gqlide.exceptions.GqlideError` to its
exit code and writes a crash log for anything unexpected.

See Also:
    :mod:`gqlide.config`: Profile and global configuration resolution.
    :mod:`gqlide.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from gqlide import __version__
from gqlide.commands.auth import auth_app
from gqlide.commands.config import config_app
from gqlide.commands.execute import execute_command
from gqlide.commands.extensions import extensions_app
from gqlide.commands.profile import profile_app
from gqlide.commands.schema import schema_command
from gqlide.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="gqlide",
    help="Query GraphQL endpoints through an extensible editor session.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("execute")(execute_command)
app.command("schema")(schema_command)
app.add_typer(auth_app, name="auth", help="Authenticated/public request mode.")
app.add_typer(extensions_app, name="extensions", help="Toolbar buttons, panels and extensions.")
app.add_typer(config_app, name="config", help="Configuration management.")
app.add_typer(profile_app, name="profile", help="Endpoint profiles.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gqlide {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", "-e", help="GraphQL endpoint URL (overrides the profile's)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output and logging."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~gqlide.output.OutputManager`, routes
    library logging to stderr, and stores ``profile`` and ``endpoint`` in
    ``ctx.obj`` for the sub-commands.
    """
    from gqlide.output import OutputFormat, OutputManager, configure_logging, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(verbose=verbose, console=output.stderr_console)

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["endpoint"] = endpoint
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback under ``<data_dir>/logs`` and return its path."""
    from gqlide.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``gqlide`` console script.

    :class:`~gqlide.exceptions.GqlideError` exits cleanly with the error's
    ``exit_code``; any other exception produces a crash log and a generic
    failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from gqlide.exceptions import GqlideError
        from gqlide.output import error

        if isinstance(exc, GqlideError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
