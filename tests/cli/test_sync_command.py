"""Tests for the sync-config command."""

import shutil

import pytest
from typer.testing import CliRunner

from opencode_sync.cli.main import app
from tests.conftest import make_source


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def locations(temp_dir):
    root = make_source(temp_dir / "repo", agents={"a.md": "alpha", "b.md": "beta"})
    return root, temp_dir / "home" / ".config" / "opencode"


def invoke(runner, locations, *args):
    root, target = locations
    return runner.invoke(app, ["--source", str(root), "--target", str(target), *args])


def test_help(runner):
    for flag in ["--help", "-h"]:
        result = runner.invoke(app, [flag])
        assert result.exit_code == 0
        assert "--no-backup" in result.output
        assert "--symlink" in result.output


def test_unknown_flag(runner, locations):
    result = invoke(runner, locations, "--bogus")
    assert result.exit_code != 0
    assert "--bogus" in result.output
    assert not locations[1].exists()


def test_default_copy(runner, locations):
    result = invoke(runner, locations)

    assert result.exit_code == 0, result.output
    agent = locations[1] / "agents" / "a.md"
    assert agent.is_file() and not agent.is_symlink()
    assert "Synced 2 agents" in result.output
    assert "Synced AGENTS.md" in result.output
    assert "To update in the future" in result.output


def test_symlink(runner, locations):
    result = invoke(runner, locations, "--symlink")

    assert result.exit_code == 0, result.output
    assert (locations[1] / "agents" / "a.md").is_symlink()
    assert "symlink mode" in result.output


def test_backup_reported_and_skippable(runner, locations):
    target = locations[1]
    invoke(runner, locations)

    result = invoke(runner, locations, "--no-backup")
    assert result.exit_code == 0, result.output
    assert list(target.parent.glob("opencode.backup.*")) == []

    result = invoke(runner, locations)
    assert result.exit_code == 0, result.output
    assert "Backup created" in result.output
    assert len(list(target.parent.glob("opencode.backup.*"))) == 1


def test_missing_agents_dir_exits_nonzero(runner, temp_dir):
    root = make_source(temp_dir / "repo", agents=None)
    target = temp_dir / "target"

    result = runner.invoke(app, ["--source", str(root), "--target", str(target)])

    assert result.exit_code == 1
    assert "agents directory" in result.output
    assert not target.exists()


def test_partial_failure_exits_nonzero(runner, locations, monkeypatch):
    original = shutil.copy2

    def copy2(source, destination, **kwargs):
        if source.name == "b.md":
            raise PermissionError(13, "Permission denied", str(destination))
        return original(source, destination, **kwargs)

    monkeypatch.setattr("opencode_sync.sync.executor.shutil.copy2", copy2)
    result = invoke(runner, locations)

    assert result.exit_code == 1
    assert "Synced 1 agent" in result.output
    assert "entries failed" in result.output
    assert (locations[1] / "agents" / "a.md").exists()


def test_dry_run(runner, locations):
    result = invoke(runner, locations, "--dry-run")

    assert result.exit_code == 0, result.output
    assert "Sync plan" in result.output
    assert not locations[1].exists()


def test_target_inside_source_is_usage_error(runner, locations):
    root, _ = locations
    result = runner.invoke(app, ["--source", str(root), "--target", str(root / "out")])

    assert result.exit_code == 2
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "must not be inside" in result.output
    assert "Usage" in result.output
    assert not (root / "out").exists()


def test_missing_default_source_suggests_flag(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    monkeypatch.setattr("opencode_sync.utils.paths.REPO_ROOT", temp_dir / "site-packages")

    result = runner.invoke(app, ["--target", str(temp_dir / "target")])

    assert result.exit_code == 1
    assert "--source" in result.output
    assert "site-packages" not in result.output
    assert not (temp_dir / "target").exists()


def test_environment_target(runner, locations, monkeypatch):
    root, target = locations
    monkeypatch.setenv("OPENCODE_SYNC_TARGET", str(target))

    result = runner.invoke(app, ["--source", str(root)])

    assert result.exit_code == 0, result.output
    assert (target / "AGENTS.md").exists()
