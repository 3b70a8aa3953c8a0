"""Auth commands -- inspect and switch the authenticated/public request mode.

The mode is kept in local storage and applies to every later ``execute``.
Introspection is always authenticated regardless of the mode.

Typical workflow::

    gqlide auth status
    gqlide auth toggle
    gqlide auth set public
"""

from __future__ import annotations

import enum

import typer

from gqlide.config import load_auth_preference, save_auth_preference
from gqlide.output import OutputFormat, format_response, get_output, print_data, success


auth_app = typer.Typer(no_args_is_help=True)


class AuthMode(str, enum.Enum):
    AUTHENTICATED = "authenticated"
    PUBLIC = "public"


def _describe(is_authenticated: bool) -> str:
    return AuthMode.AUTHENTICATED.value if is_authenticated else AuthMode.PUBLIC.value


@auth_app.command("status")
def auth_status() -> None:
    """Show whether requests are sent authenticated or public."""
    is_authenticated = load_auth_preference()
    if get_output().format == OutputFormat.JSON:
        format_response({"mode": _describe(is_authenticated), "is_authenticated": is_authenticated})
    else:
        print_data(_describe(is_authenticated))


@auth_app.command("toggle")
def auth_toggle() -> None:
    """Switch between authenticated and public mode."""
    is_authenticated = not load_auth_preference()
    save_auth_preference(is_authenticated)
    success(f"Requests are now {_describe(is_authenticated)}.")


@auth_app.command("set")
def auth_set(
    mode: AuthMode = typer.Argument(help="authenticated or public."),
) -> None:
    """Set the request mode explicitly."""
    save_auth_preference(mode is AuthMode.AUTHENTICATED)
    success(f"Requests are now {mode.value}.")
