"""Unit tests for the command-line entry point."""

from unittest.mock import MagicMock

import pytest
import requests
from click.testing import CliRunner

import sync
from trello_sync import __version__


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """No credentials and no .env unless a test sets them."""
    for name in ("TRELLO_API_KEY", "TRELLO_TOKEN", "TRELLO_BASE_URL", "TRELLO_TIMEOUT", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRELLO_API_KEY", "test-key")
    monkeypatch.setenv("TRELLO_TOKEN", "test-token")


@pytest.fixture
def api_factory(monkeypatch: pytest.MonkeyPatch, fake_trello) -> MagicMock:
    """Replace the real Trello client with the in-memory fake."""
    factory = MagicMock(return_value=fake_trello)
    monkeypatch.setattr(sync, "TrelloAPI", factory)
    return factory


@pytest.mark.unit
class TestBuild:
    """Tests for the default build command."""

    @pytest.mark.parametrize("present", ["TRELLO_API_KEY", "TRELLO_TOKEN", None])
    def test_missing_credentials_exit_before_any_call(
        self,
        runner: CliRunner,
        monkeypatch: pytest.MonkeyPatch,
        api_factory: MagicMock,
        present,
    ) -> None:
        """Missing config is fatal and no client is ever built."""
        if present:
            monkeypatch.setenv(present, "value")

        result = runner.invoke(sync.cli, [])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        api_factory.assert_not_called()

    def test_success(
        self, runner: CliRunner, credentials, api_factory: MagicMock, fake_trello
    ) -> None:
        result = runner.invoke(sync.cli, [])

        assert result.exit_code == 0, result.output
        assert "Sprint 0 board complete" in result.output
        assert "Safe to re-run" in result.output
        config = api_factory.call_args.args[0]
        assert config.api_key == "test-key"
        assert len(fake_trello.organizations) == 1

    def test_explicit_build_command(
        self, runner: CliRunner, credentials, api_factory: MagicMock
    ) -> None:
        result = runner.invoke(sync.cli, ["build"])

        assert result.exit_code == 0, result.output

    def test_rerun_is_idempotent(
        self, runner: CliRunner, credentials, api_factory: MagicMock, fake_trello
    ) -> None:
        runner.invoke(sync.cli, [])
        posts = len(fake_trello.posts)

        result = runner.invoke(sync.cli, [])

        assert result.exit_code == 0
        assert len(fake_trello.posts) == posts

    def test_api_error_prints_payload(
        self, runner: CliRunner, credentials, api_factory: MagicMock, fake_trello
    ) -> None:
        """The remote error payload is shown and the run exits non-zero."""
        fake_trello.fail_path = r"/boards/[^/]+/labels"

        result = runner.invoke(sync.cli, [])

        assert result.exit_code == 1
        assert "Trello build failed" in result.output
        assert "Rate limit exceeded" in result.output
        assert "Sprint 0 board complete" not in result.output
        assert not fake_trello.labels

    def test_transport_error_prints_message(
        self, runner: CliRunner, credentials, api_factory: MagicMock, fake_trello
    ) -> None:
        fake_trello.get = MagicMock(side_effect=requests.ConnectionError("connection refused"))

        result = runner.invoke(sync.cli, [])

        assert result.exit_code == 1
        assert "connection refused" in result.output

    def test_unexpected_error_exits_non_zero(
        self, runner: CliRunner, credentials, api_factory: MagicMock, fake_trello
    ) -> None:
        fake_trello.get = MagicMock(side_effect=KeyError("id"))

        result = runner.invoke(sync.cli, ["--debug"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_keyboard_interrupt_cancels_build(
        self, runner: CliRunner, credentials, api_factory: MagicMock, fake_trello
    ) -> None:
        """Ctrl-C stops the run with the conventional exit status."""
        fake_trello.get = MagicMock(side_effect=KeyboardInterrupt)

        result = runner.invoke(sync.cli, [])

        assert result.exit_code == 130
        assert "Build cancelled" in result.output
        assert "Sprint 0 board complete" not in result.output

    def test_invalid_timeout_is_configuration_error(
        self,
        runner: CliRunner,
        monkeypatch: pytest.MonkeyPatch,
        credentials,
        api_factory: MagicMock,
    ) -> None:
        monkeypatch.setenv("TRELLO_TIMEOUT", "0")

        result = runner.invoke(sync.cli, [])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        api_factory.assert_not_called()


@pytest.mark.unit
class TestPlan:
    """Tests for the offline plan command."""

    def test_shows_cards_without_credentials(
        self, runner: CliRunner, api_factory: MagicMock
    ) -> None:
        result = runner.invoke(sync.cli, ["plan"])

        assert result.exit_code == 0, result.output
        assert "S0-00" in result.output
        assert "S0-09" in result.output
        api_factory.assert_not_called()


@pytest.mark.unit
class TestVersion:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(sync.cli, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
