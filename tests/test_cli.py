"""CLI tests — click's CliRunner with the HTTP layer mocked by httpx.MockTransport."""

import httpx
import pytest
from click.testing import CliRunner

from blogapi.cli import main as cli_module


@pytest.fixture
def mock_api(monkeypatch):
    """Route the CLI's HTTP client to a handler; returns the list of seen requests."""
    seen = []

    def install(handler):
        def recording(request):
            seen.append(request)
            return handler(request)

        monkeypatch.setattr(
            cli_module,
            "_client",
            lambda: httpx.AsyncClient(
                base_url="http://blog.test", transport=httpx.MockTransport(recording)
            ),
        )
        return seen

    return install


def test_version():
    result = CliRunner().invoke(cli_module.main, ["--version"])
    assert result.exit_code == 0
    assert "blogapi" in result.output


def test_login_prints_token(mock_api):
    seen = mock_api(
        lambda req: httpx.Response(200, json={"message": "Login successful", "token": "tok-123", "user": {}})
    )
    result = CliRunner().invoke(cli_module.main, ["login", "a@x.com", "--password", "secret1"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "tok-123"
    assert seen[0].url.path == "/api/auth/login"


def test_login_failure_exits_nonzero(mock_api):
    mock_api(lambda req: httpx.Response(401, json={"detail": "Invalid credentials"}))
    result = CliRunner().invoke(cli_module.main, ["login", "a@x.com", "--password", "nope"])
    assert result.exit_code == 1
    assert "Invalid credentials" in result.output


def test_whoami_sends_bearer_header(mock_api):
    seen = mock_api(
        lambda req: httpx.Response(200, json={"id": "1", "username": "alice", "email": "a@x.com"})
    )
    result = CliRunner().invoke(cli_module.main, ["whoami", "--token", "tok-123"])
    assert result.exit_code == 0, result.output
    assert '"username": "alice"' in result.output
    assert seen[0].headers["Authorization"] == "Bearer tok-123"


def test_init_db_creates_tables():
    result = CliRunner().invoke(cli_module.main, ["init-db"])
    assert result.exit_code == 0, result.output
    assert "Tables created" in result.output
