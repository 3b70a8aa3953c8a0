"""Profile commands -- manage the GraphQL endpoints gqlide talks to.

Each profile is one JSON file in the profiles directory and holds the
endpoint, both credential layers, request settings and the data handed to
the editor at boot.

Typical workflow::

    gqlide profile add staging https://staging.example.com/graphql \\
        --session-auth bearer --session-source env:STAGING_TOKEN \\
        --transport-auth basic --transport-source env:STAGING_BASIC
    gqlide profile list
    gqlide profile remove staging --force
"""

from __future__ import annotations

from typing import Optional

import typer

from gqlide.commands._common import exit_on_error
from gqlide.models import CredentialConfig, Profile, RequestConfig
from gqlide.output import format_response, info, print_table, success, suggest


profile_app = typer.Typer(no_args_is_help=True)


def _credential(
    type_: Optional[str], source: Optional[str], **extra: Optional[str]
) -> Optional[CredentialConfig]:
    if type_ is None:
        return None
    options = {k: v for k, v in extra.items() if v is not None}
    return CredentialConfig(type=type_, source=source or "prompt", **options)


@profile_app.command("add")
def profile_add(
    name: str = typer.Argument(help="Profile name."),
    endpoint: str = typer.Argument(help="GraphQL endpoint URL."),
    display_name: Optional[str] = typer.Option(None, "--display-name", help="Viewer name shown in the editor."),
    session_auth: Optional[str] = typer.Option(
        None, "--session-auth", help="Session credential type: basic, bearer, cookie, none."
    ),
    session_source: Optional[str] = typer.Option(
        None, "--session-source", help="Session credential source (env:VAR, file:/path, value:X, prompt)."
    ),
    cookie_name: Optional[str] = typer.Option(None, "--cookie-name", help="Cookie name for cookie sessions."),
    transport_auth: Optional[str] = typer.Option(
        None, "--transport-auth", help="Credential sent with every request, e.g. basic."
    ),
    transport_source: Optional[str] = typer.Option(
        None, "--transport-source", help="Transport credential source."
    ),
    timeout: int = typer.Option(30, "--timeout", help="Request timeout in seconds."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing profile."),
) -> None:
    """Create or overwrite a profile."""
    from gqlide.config import profile_exists, save_profile

    if profile_exists(name) and not force:
        info(f"Profile '{name}' already exists.")
        suggest("Pass --force to overwrite it.")
        raise typer.Exit(code=2)

    profile = Profile(
        name=name,
        endpoint=endpoint,
        display_name=display_name,
        session_auth=_credential(session_auth, session_source, cookie_name=cookie_name),
        transport_auth=_credential(transport_auth, transport_source),
        request=RequestConfig(timeout=timeout, verify_ssl=not insecure),
    )
    save_profile(profile)
    success(f"Saved profile '{name}'.")


@profile_app.command("list")
def profile_list() -> None:
    """List saved profiles."""
    from gqlide.config import list_profiles, load_global_config, load_profile

    default = load_global_config().default_profile
    rows: list[list[str]] = []
    with exit_on_error():
        for name in list_profiles():
            profile = load_profile(name)
            rows.append([
                name,
                profile.endpoint,
                profile.session_auth.type if profile.session_auth else "-",
                "*" if name == default else "",
            ])
    print_table(["Name", "Endpoint", "Session auth", "Default"], rows, title="Profiles")


@profile_app.command("show")
def profile_show(name: str = typer.Argument(help="Profile name.")) -> None:
    """Print a profile's stored settings."""
    from gqlide.config import load_profile

    with exit_on_error():
        profile = load_profile(name)
    format_response(profile.model_dump(mode="json", exclude_none=True))


@profile_app.command("remove")
def profile_remove(
    name: str = typer.Argument(help="Profile name."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Delete a profile."""
    from gqlide.config import delete_profile

    if not force and not typer.confirm(f"Remove profile '{name}'?"):
        info("Cancelled.")
        raise typer.Exit()
    with exit_on_error():
        delete_profile(name)
    success(f"Removed profile '{name}'.")
