"""Tests for the command line entry point."""

import io

import pytest
from unittest.mock import patch

from vault2git.adapters.config import EnvironmentConfigProvider
from vault2git.cli import ExitCode, main
from vault2git.cli.app import build_parser
from vault2git.cli.output import Console
from vault2git.core.domain.entities import PassResult, SyncOutcome
from vault2git.core.domain.enums import ErrorKind, FailureReason
from vault2git.core.ports.remote_repository import InvalidRequestError

from conftest import InMemoryRemote


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in EnvironmentConfigProvider.ENV_MAPPING:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def vault(tmp_path):
    root = tmp_path / "vault"
    root.mkdir()
    (root / "a.md").write_bytes(b"hello")
    (root / "b.md").write_bytes(b"world")
    return root


@pytest.fixture
def remote():
    return InMemoryRemote({"a.md": b"hello"})


@pytest.fixture
def configured(monkeypatch, vault):
    monkeypatch.setenv("VAULT2GIT_TOKEN", "ghp_test")
    monkeypatch.setenv("VAULT2GIT_REPO", "notes")
    monkeypatch.setenv("VAULT2GIT_BRANCH", "main")
    monkeypatch.setenv("VAULT2GIT_VAULT", str(vault))


class TestParser:
    """Tests for build_parser."""

    def test_modes_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--watch", "--auth"])

    def test_verbose_defaults_to_none(self):
        assert build_parser().parse_args([]).verbose is None


class TestMain:
    """Tests for main()."""

    def test_missing_config(self, capsys):
        assert main([]) == ExitCode.CONFIG_ERROR
        assert "Personal Access Token" in capsys.readouterr().out

    def test_sync_once(self, configured, remote, capsys):
        with patch("vault2git.cli.app.create_remote", return_value=remote):
            code = main(["--device", "Laptop"])

        assert code == ExitCode.SUCCESS
        assert remote.files["b.md"][0] == b"world"
        assert remote.writes[0][4] == "Laptop: Updated b.md"
        assert "1 committed, 1 skipped, 0 failed" in capsys.readouterr().out

    def test_partial_failure(self, configured, remote):
        remote.write_errors["b.md"] = [InvalidRequestError("rejected")]

        with patch("vault2git.cli.app.create_remote", return_value=remote):
            assert main([]) == ExitCode.PARTIAL_FAILURE

    def test_auth_failure(self, configured, remote):
        remote.authenticated = False

        with patch("vault2git.cli.app.create_remote", return_value=remote):
            assert main([]) == ExitCode.AUTH_ERROR
        assert remote.writes == []

    def test_missing_vault(self, monkeypatch, remote):
        monkeypatch.setenv("VAULT2GIT_TOKEN", "t")
        monkeypatch.setenv("VAULT2GIT_REPO", "notes")
        monkeypatch.setenv("VAULT2GIT_BRANCH", "main")

        with patch("vault2git.cli.app.create_remote", return_value=remote):
            assert main([]) == ExitCode.CONFIG_ERROR

    def test_auth_mode(self, monkeypatch, remote, capsys):
        monkeypatch.setenv("VAULT2GIT_TOKEN", "t")

        with patch("vault2git.cli.app.create_remote", return_value=remote):
            assert main(["--auth"]) == ExitCode.SUCCESS
        assert "alice" in capsys.readouterr().out

    def test_list_branches(self, monkeypatch, remote, capsys):
        monkeypatch.setenv("VAULT2GIT_TOKEN", "t")

        with patch("vault2git.cli.app.create_remote", return_value=remote):
            assert main(["--repo", "notes", "--list-branches"]) == ExitCode.SUCCESS
        assert ("list_branches", "alice/notes") in remote.calls
        assert "Branches of alice/notes" in capsys.readouterr().out


class TestConsole:
    """Tests for Console output."""

    def test_pass_result_lists_failures(self):
        stream = io.StringIO()
        result = PassResult(repository="alice/notes", branch="main", outcomes=[
            SyncOutcome.committed("a.md", "s"),
            SyncOutcome.failed("b.md", ErrorKind.PERMANENT, "conflict", FailureReason.CONFLICT),
        ])

        Console(stream=stream).pass_result(result)

        out = stream.getvalue()
        assert "\033[" not in out
        assert "b.md: conflict" in out
        assert "1 committed, 0 skipped, 1 failed" in out
