"""
Test Configuration and Fixtures
=============================

This module provides pytest fixtures and utilities for testing opencode-sync.
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from opencode_sync.utils.paths import SOURCE_ENV, TARGET_ENV, SyncPaths


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep path overrides from the developer's shell out of the tests."""
    monkeypatch.delenv(SOURCE_ENV, raising=False)
    monkeypatch.delenv(TARGET_ENV, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path: Path to the temporary directory

    Note:
        The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir).resolve()


def make_source(
    root: Path,
    agents: dict[str, str] | None = None,
    skills: dict[str, dict[str, str]] | None = None,
    tools: dict[str, str] | None = None,
    config: str | None = '{"$schema": "https://opencode.ai/config.json"}\n',
    rules: str | None = "# Rules\n\nBe precise.\n",
) -> Path:
    """Lay out a config repository under root and return root."""
    root.mkdir(parents=True, exist_ok=True)
    if config is not None:
        (root / "opencode.json").write_text(config)
    if rules is not None:
        (root / "docs").mkdir(exist_ok=True)
        (root / "docs" / "AGENTS.md").write_text(rules)
    if agents is not None:
        agents_dir = root / ".opencode" / "agents"
        agents_dir.mkdir(parents=True, exist_ok=True)
        for name, content in agents.items():
            (agents_dir / name).write_text(content)
    if skills is not None:
        for skill, files in skills.items():
            for relpath, content in files.items():
                path = root / ".opencode" / "skills" / skill / relpath
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content)
    if tools is not None:
        tools_dir = root / ".opencode" / "tools"
        tools_dir.mkdir(parents=True, exist_ok=True)
        for name, content in tools.items():
            (tools_dir / name).write_text(content)
    return root


def snapshot(directory: Path) -> dict[str, tuple[str, str]]:
    """Describe every file and symlink under a directory, for tree comparisons."""
    state = {}
    for dirpath, dirnames, filenames in os.walk(directory):
        for name in dirnames + filenames:
            path = Path(dirpath) / name
            rel = str(path.relative_to(directory))
            if path.is_symlink():
                state[rel] = ("link", os.readlink(path))
            elif path.is_file():
                state[rel] = ("file", path.read_text())
    return state


@pytest.fixture
def source_repo(temp_dir: Path) -> Path:
    """
    Create a config repository with agents, one skill and one tool.

    Args:
        temp_dir: Temporary directory fixture

    Returns:
        Path: Root of the config repository
    """
    return make_source(
        temp_dir / "repo",
        agents={"a.md": "# Agent A\n", "b.md": "# Agent B\n"},
        skills={"review": {"SKILL.md": "# Review\n", "refs/checklist.md": "- [ ] tests\n"}},
        tools={"gate.ts": "export default {}\n"},
    )


@pytest.fixture
def sync_paths(temp_dir: Path, source_repo: Path) -> SyncPaths:
    """
    Create a SyncPaths instance pointing at a fake home's config directory.

    Args:
        temp_dir: Temporary directory fixture
        source_repo: Config repository fixture

    Returns:
        SyncPaths: Configured SyncPaths instance
    """
    return SyncPaths(source_root=source_repo, target_dir=temp_dir / "home" / ".config" / "opencode")
