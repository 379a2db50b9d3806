"""
Tests for CLI commands — config, sync, packages, installers, error exits.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from dotstrap.core.context import AppContext
from dotstrap.core.errors import RepositoryError, ShellError
from dotstrap.core.models.config import Configuration, InstallerDef, Target, TargetGroup
from dotstrap.core.models.packages import PackageManager
from dotstrap.core.services.package_manager import MANAGER_PROFILES
from dotstrap.main import cli

APT = MANAGER_PROFILES[3]


@pytest.fixture
def app(metadata, tmp_path: Path) -> AppContext:
    config = Configuration(
        tmp_dir=str(tmp_path / "tmp"),
        install_url=metadata.base_url + "install.sh",
        help_description="Alice's machines",
        sync={
            "shell": TargetGroup(name="Shell", targets=[
                Target(repo_path="gitconfig", local_path=str(tmp_path / ".gitconfig")),
            ]),
        },
        installers={"neovim": InstallerDef(description="nightly", install=[{"build": "make"}])},
        metadata=metadata,
    )
    pm = PackageManager(profile=APT, packages={
        "cli": {"fd": {"apt": "fd-find"}, "yay": {"pacman": "yay"}},
    })
    return AppContext(config=config, package_manager=pm)


def _invoke(app, *args):
    return CliRunner().invoke(cli, list(args), obj={"app": app})


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "dotstrap" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_subcommand_help_does_not_resolve(self):
        with patch("dotstrap.ui.cli.common.build_context") as build:
            result = CliRunner().invoke(cli, ["packages", "install", "--help"])
        assert result.exit_code == 0
        build.assert_not_called()

    def test_context_built_once(self, app):
        with patch("dotstrap.ui.cli.common.build_context", return_value=app) as build:
            result = CliRunner().invoke(cli, ["config", "targets"])
        assert result.exit_code == 0
        build.assert_called_once_with(None)

    def test_resolution_failure_exits_1(self):
        with patch("dotstrap.ui.cli.common.build_context",
                   side_effect=RepositoryError("remote.origin.url is not set")):
            result = CliRunner().invoke(cli, ["config", "show"])
        assert result.exit_code == 1
        assert "remote.origin.url is not set" in result.output


class TestConfigCommands:
    def test_show(self, app):
        result = _invoke(app, "config", "show")
        assert result.exit_code == 0
        assert "alice/dotfiles" in result.output
        assert "install.sh" in result.output
        assert "Shell" in result.output

    def test_show_json(self, app):
        result = _invoke(app, "config", "show", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["help_description"] == "Alice's machines"
        assert data["metadata"]["path_count"] == len(app.config.metadata.git_paths)
        assert "git_paths" not in data["metadata"]

    def test_targets_json(self, app, tmp_path: Path):
        result = _invoke(app, "config", "targets", "--json")
        assert json.loads(result.output) == {"gitconfig": str(tmp_path / ".gitconfig")}


class TestSyncCommand:
    def test_dry_run(self, app, tmp_path: Path):
        result = _invoke(app, "sync", "--dry-run")
        assert result.exit_code == 0
        assert "gitconfig" in result.output
        assert not (tmp_path / ".gitconfig").exists()

    def test_writes(self, app, tmp_path: Path):
        with patch("dotstrap.core.services.sync_ops.download", return_value=b"[user]\n"):
            result = _invoke(app, "sync")
        assert result.exit_code == 0
        assert (tmp_path / ".gitconfig").read_bytes() == b"[user]\n"

    def test_unknown_group(self, app):
        result = _invoke(app, "sync", "--group", "nope")
        assert result.exit_code == 1
        assert "Unknown sync group" in result.output


class TestPackagesCommands:
    def test_manager(self, app):
        result = _invoke(app, "packages", "manager", "--json")
        assert json.loads(result.output)["name"] == "apt"

    def test_show(self, app):
        result = _invoke(app, "packages", "show", "fd")
        assert result.exit_code == 0
        assert "apt install -y fd-find" in result.output

    def test_show_missing(self, app):
        result = _invoke(app, "packages", "show", "ghost")
        assert result.exit_code == 1

    def test_install_runs_command(self, app):
        with patch("dotstrap.ui.cli.packages.run_interactive") as run:
            result = _invoke(app, "packages", "install", "fd")
        assert result.exit_code == 0
        run.assert_called_once_with("apt install -y fd-find")

    def test_install_reports_unresolved(self, app):
        with patch("dotstrap.ui.cli.packages.run_interactive") as run:
            result = _invoke(app, "packages", "install", "ghost", "yay", "fd")
        assert result.exit_code == 1
        assert "No package definition for 'ghost'" in result.output
        assert "'yay' has no command for apt" in result.output
        run.assert_called_once_with("apt install -y fd-find")

    def test_uninstall_dry_run(self, app):
        with patch("dotstrap.ui.cli.packages.run_interactive") as run:
            result = _invoke(app, "packages", "uninstall", "fd", "--dry-run")
        assert result.exit_code == 0
        assert "apt remove -y fd-find" in result.output
        run.assert_not_called()

    def test_install_failure_exits_1(self, app):
        with patch("dotstrap.ui.cli.packages.run_interactive",
                   side_effect=ShellError("apt install -y fd-find", "exited with code 100", 100)):
            result = _invoke(app, "packages", "install", "fd")
        assert result.exit_code == 1
        assert "apt install -y fd-find" in result.output

    def test_update(self, app):
        with patch("dotstrap.ui.cli.packages.run_interactive") as run:
            result = _invoke(app, "packages", "update")
        assert result.exit_code == 0
        run.assert_called_once_with("apt update")

    def test_update_without_manager(self, app):
        bare = AppContext(config=app.config, package_manager=PackageManager())
        result = _invoke(bare, "packages", "update")
        assert result.exit_code == 1
        assert "No supported package manager" in result.output


class TestInstallersCommands:
    def test_list(self, app):
        result = _invoke(app, "installers", "list")
        assert result.exit_code == 0
        assert "neovim" in result.output
        assert "1 steps" in result.output

    def test_run_dry(self, app):
        result = _invoke(app, "installers", "run", "neovim", "--dry-run")
        assert result.exit_code == 0
        assert "build: make" in result.output

    def test_run(self, app):
        with patch("dotstrap.core.services.installer_ops.run_interactive") as run:
            result = _invoke(app, "installers", "run", "neovim")
        assert result.exit_code == 0
        run.assert_called_once_with("make", cwd=None)

    def test_run_unknown(self, app):
        result = _invoke(app, "installers", "run", "emacs")
        assert result.exit_code == 1
        assert "Unknown installer" in result.output
