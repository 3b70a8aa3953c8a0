"""End-to-end tests of the ``gqlide`` command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from graphql import build_schema, get_introspection_query, graphql_sync

from gqlide.app import app
from gqlide.client.async_dispatcher import AsyncRequestDispatcher
from gqlide.config import list_profiles, load_auth_preference, load_profile, save_auth_preference
from gqlide.extensions.manager import ExtensionManager
from gqlide.exit_codes import EXIT_AUTH_FAILURE, EXIT_GENERIC_FAILURE, EXIT_INVALID_USAGE

ENDPOINT = "https://example.com/graphql"


@pytest.fixture
def mock_endpoint(monkeypatch: pytest.MonkeyPatch) -> Callable[[Callable], None]:
    """Route every dispatcher created by the CLI through a MockTransport handler."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        original = AsyncRequestDispatcher._client_options

        def _client_options(self: AsyncRequestDispatcher) -> dict[str, Any]:
            return {**original(self), "transport": httpx.MockTransport(handler)}

        monkeypatch.setattr(AsyncRequestDispatcher, "_client_options", _client_options)

    return install


class TestExecute:
    def test_prints_response(self, cli_runner, isolated_config: Path, mock_endpoint) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"data": {"posts": [{"id": "1"}]}})

        mock_endpoint(handler)

        result = cli_runner.invoke(
            app,
            ["--json", "--endpoint", ENDPOINT, "execute", "{ posts { id } }", "-V", '{"first": 1}'],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"data": {"posts": [{"id": "1"}]}}
        assert json.loads(requests[0].content)["variables"] == {"first": 1}

    def test_reads_query_file(self, cli_runner, isolated_config: Path, mock_endpoint) -> None:
        queries: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            queries.append(json.loads(request.content)["query"])
            return httpx.Response(200, json={"data": {}})

        mock_endpoint(handler)
        (isolated_config / "q.graphql").write_text("{ viewer { name } }")

        result = cli_runner.invoke(app, ["--json", "-e", ENDPOINT, "execute", "@q.graphql"])

        assert result.exit_code == 0, result.output
        assert queries == ["{ viewer { name } }"]

    def test_public_flag_omits_session(self, cli_runner, isolated_config: Path, mock_endpoint) -> None:
        headers: list[httpx.Headers] = []

        def handler(request: httpx.Request) -> httpx.Response:
            headers.append(request.headers)
            return httpx.Response(200, json={"data": {}})

        mock_endpoint(handler)
        cli_runner.invoke(
            app,
            [
                "profile", "add", "staging", ENDPOINT,
                "--session-auth", "bearer", "--session-source", "value:tok",
            ],
        )

        cli_runner.invoke(app, ["--json", "execute", "{ a }"])
        cli_runner.invoke(app, ["--json", "execute", "{ a }", "--public"])
        cli_runner.invoke(app, ["--json", "execute", "{ __typename }", "--public"])

        assert headers[0].get("authorization") == "Bearer tok"
        assert "authorization" not in headers[1]
        assert headers[2].get("authorization") == "Bearer tok"
        assert load_auth_preference() is True

    def test_saved_public_mode_applies(self, cli_runner, isolated_config: Path, mock_endpoint) -> None:
        headers: list[httpx.Headers] = []

        def handler(request: httpx.Request) -> httpx.Response:
            headers.append(request.headers)
            return httpx.Response(200, json={"data": {}})

        mock_endpoint(handler)
        cli_runner.invoke(
            app,
            [
                "profile", "add", "staging", ENDPOINT,
                "--session-auth", "bearer", "--session-source", "value:tok",
            ],
        )
        save_auth_preference(False)

        cli_runner.invoke(app, ["--json", "execute", "{ a }"])

        assert "authorization" not in headers[0]

    def test_http_error_exit_code(self, cli_runner, isolated_config: Path, mock_endpoint) -> None:
        mock_endpoint(lambda request: httpx.Response(401, json={"message": "nope"}))

        result = cli_runner.invoke(app, ["-e", ENDPOINT, "execute", "{ a }"])

        assert result.exit_code == EXIT_AUTH_FAILURE
        assert "HTTP 401" in result.output

    def test_invalid_variables(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["-e", ENDPOINT, "execute", "{ a }", "-V", "[1, 2]"])

        assert result.exit_code == EXIT_INVALID_USAGE
        assert "JSON object" in result.output

    def test_no_endpoint(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["execute", "{ a }"])

        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "No GraphQL endpoint configured" in result.output


class TestSchema:
    def test_prints_sdl(self, cli_runner, isolated_config: Path, mock_endpoint) -> None:
        schema = build_schema("type Query { hello: String }")
        data = graphql_sync(schema, get_introspection_query()).data
        mock_endpoint(lambda request: httpx.Response(200, json={"data": data}))

        result = cli_runner.invoke(app, ["--plain", "-e", ENDPOINT, "schema"])

        assert result.exit_code == 0, result.output
        assert "type Query {\n  hello: String\n}" in result.stdout


class TestAuth:
    def test_status_toggle_set(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--plain", "auth", "status"])
        assert result.stdout.strip() == "authenticated"

        cli_runner.invoke(app, ["auth", "toggle"])
        assert load_auth_preference() is False

        cli_runner.invoke(app, ["auth", "set", "authenticated"])
        assert load_auth_preference() is True

        result = cli_runner.invoke(app, ["--json", "auth", "status"])
        assert json.loads(result.stdout) == {"mode": "authenticated", "is_authenticated": True}


class TestProfile:
    def test_add_list_remove(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(
            app,
            [
                "profile", "add", "staging", ENDPOINT,
                "--transport-auth", "basic", "--transport-source", "env:STAGING_BASIC",
            ],
        )
        assert result.exit_code == 0, result.output
        assert load_profile("staging").transport_auth.source == "env:STAGING_BASIC"

        result = cli_runner.invoke(app, ["--json", "profile", "list"])
        assert json.loads(result.stdout)[0]["Endpoint"] == ENDPOINT

        result = cli_runner.invoke(app, ["profile", "add", "staging", ENDPOINT])
        assert result.exit_code == 2

        result = cli_runner.invoke(app, ["profile", "remove", "staging", "--force"])
        assert result.exit_code == 0
        assert list_profiles() == []

    def test_remove_missing(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["profile", "remove", "ghost", "--force"])

        assert result.exit_code == EXIT_GENERIC_FAILURE


class TestExtensionsAndConfig:
    def test_extensions_list(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--json", "extensions", "list"])

        assert result.exit_code == 0, result.output
        names = [row["Name"] for row in json.loads(result.stdout)]
        assert names == ["prettify", "copy-query", "toggle-auth", "help", "query-composer"]

    def test_extensions_list_cleans_up_on_failure(
        self, cli_runner, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        cleaned: list[bool] = []

        def _boom(self: ExtensionManager) -> list[dict[str, str]]:
            raise RuntimeError("broken entry point")

        monkeypatch.setattr(ExtensionManager, "list_extensions", _boom)
        monkeypatch.setattr(ExtensionManager, "cleanup", lambda self: cleaned.append(True))

        result = cli_runner.invoke(app, ["extensions", "list"])

        assert result.exit_code != 0
        assert isinstance(result.exception, RuntimeError)
        assert cleaned == [True]

    def test_config_set_and_show(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["config", "set", "extensions.disabled", "share,merge"])
        assert result.exit_code == 0, result.output

        result = cli_runner.invoke(app, ["--json", "--quiet", "config", "show"])
        assert json.loads(result.stdout)["extensions"]["disabled"] == ["share", "merge"]

    def test_config_set_unknown_key(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["config", "set", "nope", "x"])

        assert result.exit_code == 2


def test_version(cli_runner) -> None:
    result = cli_runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("gqlide ")
