"""Shared test fixtures for gqlide.

Provides isolated config environments, output state management, a CLI
runner, fresh editor contexts and helpers for mocked GraphQL endpoints.
These fixtures are discovered by pytest automatically.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import httpx
import pytest

from gqlide.context import EditorContext, create_context
from gqlide.models import CredentialConfig, Profile, RequestConfig
from gqlide.output import OutputFormat, OutputManager, reset_output, set_output


ENDPOINT = "https://example.com/graphql"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams the
    cached references go stale once the test ends. Log handlers installed
    by the CLI callback hold the same stale streams and are removed too.
    """
    yield
    reset_output()
    logger = logging.getLogger("gqlide")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME and XDG_DATA_HOME into tmp_path and clear GQLIDE_* vars.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("gqlide.config._is_xdg_platform", lambda: True)

    for var in ["GQLIDE_PROFILE", "GQLIDE_ENDPOINT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_profile() -> Profile:
    """A profile with a bearer session token and a Basic transport credential."""
    return Profile(
        name="staging",
        endpoint=ENDPOINT,
        display_name="admin",
        session_auth=CredentialConfig(type="bearer", source="value:session-token"),
        transport_auth=CredentialConfig(type="basic", source="value:staging:secret"),
        request=RequestConfig(timeout=5),
        external_fragments=["fragment PostFields on Post { title }"],
        feature_flags={"query_composer": True},
    )


@pytest.fixture
def editor_context(isolated_config: Path, sample_profile: Profile) -> EditorContext:
    """A fresh authenticated editor context bound to :func:`sample_profile`."""
    return create_context(sample_profile, is_authenticated=True)


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def graphql_handler(
    recorded_requests: list[httpx.Request],
) -> Callable[[httpx.Request], httpx.Response]:
    """A MockTransport handler that records requests and answers ``{"data": {}}``."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(200, json={"data": {}})

    return handler


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
