"""Tests for CLI subcommands."""

from __future__ import annotations

import argparse
from unittest import mock

import pytest

from conftest import FakePrompter
from repo_launcher import __version__
from repo_launcher.__main__ import (
    _create_parser,
    _run_update_check,
    cmd_interactive,
    cmd_open,
    cmd_uninstall,
    cmd_upgrade,
    main,
)
from repo_launcher.exceptions import (
    ConfigParseError,
    RepositoryNotFoundError,
    UninstallError,
    UpdateCheckError,
    UpgradeError,
)
from repo_launcher.launcher import LaunchResult
from repo_launcher.models import Repository
from repo_launcher.updates import UpdateInfo


class TestArgumentParser:
    """Test argument parser configuration."""

    def test_no_subcommand_is_interactive(self) -> None:
        """No arguments means interactive mode."""
        args = _create_parser().parse_args([])
        assert args.command is None
        assert args.ignore_config is False

    def test_open_subcommand(self) -> None:
        """open takes a positional name."""
        args = _create_parser().parse_args(["open", "myrepo"])
        assert args.command == "open"
        assert args.name == "myrepo"
        assert args.ignore_config is False

    def test_open_ignore_config_long(self) -> None:
        """--ignore-config sets the bypass flag."""
        args = _create_parser().parse_args(["open", "myrepo", "--ignore-config"])
        assert args.ignore_config is True

    def test_open_ignore_config_short(self) -> None:
        """-i is the short form of the bypass flag."""
        args = _create_parser().parse_args(["open", "-i", "myrepo"])
        assert args.ignore_config is True

    def test_ignore_config_before_subcommand(self) -> None:
        """-i given before the subcommand still reaches open."""
        args = _create_parser().parse_args(["-i", "open", "foo"])
        assert args.command == "open"
        assert args.name == "foo"
        assert args.ignore_config is True

    def test_ignore_config_interactive(self) -> None:
        """-i without a subcommand applies to interactive mode."""
        assert _create_parser().parse_args(["-i"]).ignore_config is True

    def test_get_alias(self) -> None:
        """'get' is accepted as an alias for open."""
        args = _create_parser().parse_args(["get", "myrepo"])
        assert args.command == "get"
        assert args.name == "myrepo"

    def test_open_requires_name(self) -> None:
        """open without a name is a usage error."""
        with pytest.raises(SystemExit):
            _create_parser().parse_args(["open"])

    def test_maintenance_subcommands(self) -> None:
        """upgrade and uninstall parse without arguments."""
        parser = _create_parser()
        assert parser.parse_args(["upgrade"]).command == "upgrade"
        assert parser.parse_args(["uninstall"]).command == "uninstall"

    def test_version(self, capsys) -> None:
        """--version prints the product version."""
        with pytest.raises(SystemExit) as exc_info:
            _create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_logging_flags(self) -> None:
        """Global logging flags are parsed."""
        args = _create_parser().parse_args(["--debug", "--no-log-file", "--no-update-check"])
        assert args.debug is True
        assert args.no_log_file is True
        assert args.no_update_check is True
        assert args.log_level == "INFO"


def _args(**kwargs) -> argparse.Namespace:
    defaults = {"ignore_config": False, "name": "repo"}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


class TestCmdOpen:
    """Test the open command handler."""

    def test_success(self) -> None:
        """A successful open exits 0."""
        with mock.patch("repo_launcher.launcher.RepositoryLauncher") as launcher_cls:
            launcher_cls.return_value.open.return_value = LaunchResult(
                Repository(path="/r", name="repo"), "vim"
            )
            assert cmd_open(_args(name="rep", ignore_config=True)) == 0
        launcher_cls.return_value.open.assert_called_once_with("rep", ignore_config=True)

    def test_not_found(self, capsys) -> None:
        """A missing repository prints one line and exits 1."""
        with mock.patch("repo_launcher.launcher.RepositoryLauncher") as launcher_cls:
            launcher_cls.return_value.open.side_effect = RepositoryNotFoundError(query="zzz")
            assert cmd_open(_args(name="zzz")) == 1
        err = capsys.readouterr().err
        assert "Repository not found." in err
        assert len(err.strip().splitlines()) == 1

    def test_error_message_without_context(self, capsys) -> None:
        """Only the message is printed; context stays in the log."""
        with mock.patch("repo_launcher.launcher.RepositoryLauncher") as launcher_cls:
            launcher_cls.return_value.open.side_effect = RepositoryNotFoundError(query="zzz")
            cmd_open(_args(name="zzz"))
        assert capsys.readouterr().err.strip() == "Error: Repository not found."

    def test_error_is_logged(self, caplog) -> None:
        """Handled errors are written to the log with their context."""
        with mock.patch("repo_launcher.launcher.RepositoryLauncher") as launcher_cls:
            launcher_cls.return_value.open.side_effect = RepositoryNotFoundError(query="zzz")
            with caplog.at_level("ERROR", logger="repo_launcher"):
                cmd_open(_args(name="zzz"))
        assert "Error: Repository not found. (query=zzz)" in caplog.text

    def test_config_error_on_load(self, capsys) -> None:
        """A broken config file is reported and exits 1."""
        with mock.patch(
            "repo_launcher.launcher.RepositoryLauncher",
            side_effect=ConfigParseError("Invalid JSON in config file at line 1"),
        ):
            assert cmd_open(_args()) == 1
        assert "Invalid JSON" in capsys.readouterr().err


class TestCmdInteractive:
    """Test the default interactive handler."""

    def test_success(self) -> None:
        """Interactive mode forwards the bypass flag."""
        with mock.patch("repo_launcher.launcher.RepositoryLauncher") as launcher_cls:
            assert cmd_interactive(_args(ignore_config=True)) == 0
        launcher_cls.return_value.run_interactive.assert_called_once_with(ignore_config=True)

    def test_failure(self, capsys) -> None:
        """Errors exit 1."""
        with mock.patch("repo_launcher.launcher.RepositoryLauncher") as launcher_cls:
            launcher_cls.return_value.run_interactive.side_effect = RepositoryNotFoundError(
                "No repositories found in /gh"
            )
            assert cmd_interactive(_args()) == 1
        assert "No repositories found" in capsys.readouterr().err


class TestCmdUpgrade:
    """Test the upgrade handler."""

    def test_success(self) -> None:
        """A successful upgrade exits 0."""
        with mock.patch("repo_launcher.updates.upgrade") as upgrade:
            assert cmd_upgrade(_args()) == 0
        upgrade.assert_called_once_with()

    def test_failure(self, capsys) -> None:
        """A failed upgrade exits 1."""
        with mock.patch(
            "repo_launcher.updates.upgrade", side_effect=UpgradeError("Upgrade failed: boom")
        ):
            assert cmd_upgrade(_args()) == 1
        assert "Upgrade failed" in capsys.readouterr().err


class TestCmdUninstall:
    """Test the uninstall handler."""

    def test_cancelled(self, capsys) -> None:
        """Declining leaves everything in place and exits 0."""
        with mock.patch("repo_launcher.updates.uninstall") as uninstall:
            assert cmd_uninstall(_args(), prompter=FakePrompter(confirms=[False])) == 0
        uninstall.assert_not_called()
        assert "Uninstall canceled." in capsys.readouterr().out

    def test_confirmed(self, capsys) -> None:
        """Confirming uninstalls and exits 0."""
        with mock.patch("repo_launcher.updates.uninstall") as uninstall:
            assert cmd_uninstall(_args(), prompter=FakePrompter(confirms=[True])) == 0
        uninstall.assert_called_once_with()
        assert "Uninstalled successfully." in capsys.readouterr().out

    def test_failure(self) -> None:
        """A failed uninstall exits 1."""
        with mock.patch(
            "repo_launcher.updates.uninstall", side_effect=UninstallError("Error uninstalling")
        ):
            assert cmd_uninstall(_args(), prompter=FakePrompter(confirms=[True])) == 1


class TestUpdateCheck:
    """Test the update notice printed before commands."""

    def test_skipped_by_flag(self) -> None:
        """--no-update-check avoids the request."""
        with mock.patch("repo_launcher.updates.check_for_updates") as check:
            _run_update_check(_args(no_update_check=True))
        check.assert_not_called()

    def test_skipped_by_env(self, monkeypatch) -> None:
        """GET_NO_UPDATE_CHECK avoids the request."""
        monkeypatch.setenv("GET_NO_UPDATE_CHECK", "1")
        with mock.patch("repo_launcher.updates.check_for_updates") as check:
            _run_update_check(_args(no_update_check=False))
        check.assert_not_called()

    def test_prints_notice(self, capsys, monkeypatch) -> None:
        """A newer release is announced."""
        monkeypatch.delenv("GET_NO_UPDATE_CHECK", raising=False)
        with mock.patch(
            "repo_launcher.updates.check_for_updates",
            return_value=UpdateInfo(current="0.1.0", latest="0.2.0"),
        ):
            _run_update_check(_args(no_update_check=False))
        out = capsys.readouterr().out
        assert "A new version is available: 0.2.0 (current: 0.1.0)" in out
        assert "get upgrade" in out

    def test_warning_does_not_fail(self, capsys, monkeypatch) -> None:
        """Check failures only print a warning."""
        monkeypatch.delenv("GET_NO_UPDATE_CHECK", raising=False)
        with mock.patch(
            "repo_launcher.updates.check_for_updates",
            side_effect=UpdateCheckError("failed to check for updates: offline"),
        ):
            _run_update_check(_args(no_update_check=False))
        assert "Update check warning: failed to check for updates" in capsys.readouterr().out


class TestMain:
    """Test main() dispatch."""

    @pytest.fixture(autouse=True)
    def _no_side_effects(self):
        with mock.patch("repo_launcher.__main__._setup_logging"), mock.patch(
            "repo_launcher.__main__._run_update_check"
        ):
            yield

    def test_dispatches_open(self) -> None:
        """open routes to cmd_open."""
        with mock.patch("repo_launcher.__main__.cmd_open", return_value=0) as handler:
            assert main(["open", "repo"]) == 0
        handler.assert_called_once()

    def test_dispatches_alias(self) -> None:
        """The get alias routes to cmd_open."""
        with mock.patch("repo_launcher.__main__.cmd_open", return_value=1) as handler:
            assert main(["get", "repo"]) == 1
        handler.assert_called_once()

    def test_dispatches_interactive(self) -> None:
        """No subcommand routes to cmd_interactive."""
        with mock.patch("repo_launcher.__main__.cmd_interactive", return_value=0) as handler:
            assert main([]) == 0
        handler.assert_called_once()

    def test_dispatches_maintenance(self) -> None:
        """upgrade and uninstall route to their handlers."""
        with mock.patch("repo_launcher.__main__.cmd_upgrade", return_value=0) as up, mock.patch(
            "repo_launcher.__main__.cmd_uninstall", return_value=0
        ) as down:
            main(["upgrade"])
            main(["uninstall"])
        up.assert_called_once()
        down.assert_called_once()
