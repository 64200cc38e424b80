from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator
from dotenv import load_dotenv
from enum import Enum
import os
from typing import NamedTuple

from opencode_sync.utils.logging import logger

SOURCE_ENV = "OPENCODE_SYNC_SOURCE"
TARGET_ENV = "OPENCODE_SYNC_TARGET"

REPO_ROOT = Path(__file__).resolve().parent.parent.parent


class SourceLayout(NamedTuple):
    """Where each category lives relative to the source repository root."""
    config_file: str
    rules_file: str
    agents_dir: str
    skills_dir: str
    tools_dir: str


class TargetLayout(NamedTuple):
    """Where each category lands relative to the target configuration directory."""
    config_file: str
    rules_file: str
    agents_dir: str
    skills_dir: str
    tools_dir: str


SOURCE_LAYOUT = SourceLayout(
    config_file="opencode.json",
    rules_file="docs/AGENTS.md",
    agents_dir=".opencode/agents",
    skills_dir=".opencode/skills",
    tools_dir=".opencode/tools",
)

TARGET_LAYOUT = TargetLayout(
    config_file="opencode.json",
    rules_file="AGENTS.md",
    agents_dir="agents",
    skills_dir="skills",
    tools_dir="tools",
)


class SyncMode(str, Enum):
    """How each manifest entry is materialized in the target directory."""

    copy = "copy"
    symlink = "symlink"


def default_target_dir() -> Path:
    """Get the default target directory (~/.config/opencode)."""
    return Path.home() / ".config" / "opencode"


def default_source_root() -> Path:
    """Get the default source root.

    The current directory wins when it looks like a checkout of the config
    repository. An editable install falls back to the checkout this package
    lives in. Otherwise the current directory is returned and the missing
    rules file is reported against it.
    """
    cwd = Path.cwd()
    for candidate in (cwd, REPO_ROOT):
        if (candidate / SOURCE_LAYOUT.rules_file).exists():
            return candidate
    return cwd


class SyncPaths(BaseModel):
    """Source root and target directory for a single sync run."""

    model_config = ConfigDict(frozen=True)

    source_root: Path = Field(default_factory=default_source_root)
    target_dir: Path = Field(default_factory=default_target_dir)

    @field_validator("source_root", "target_dir", mode="before")
    @classmethod
    def _expand(cls, value):
        return Path(value).expanduser()

    @property
    def source_config_file(self) -> Path:
        return self.source_root / SOURCE_LAYOUT.config_file

    @property
    def source_rules_file(self) -> Path:
        return self.source_root / SOURCE_LAYOUT.rules_file

    @property
    def source_agents_dir(self) -> Path:
        return self.source_root / SOURCE_LAYOUT.agents_dir

    @property
    def source_skills_dir(self) -> Path:
        return self.source_root / SOURCE_LAYOUT.skills_dir

    @property
    def source_tools_dir(self) -> Path:
        return self.source_root / SOURCE_LAYOUT.tools_dir

    def target_entries(self) -> list[Path]:
        """Get every well-known path in the target directory, in backup order."""
        return [
            self.target_dir / TARGET_LAYOUT.rules_file,
            self.target_dir / TARGET_LAYOUT.config_file,
            self.target_dir / TARGET_LAYOUT.agents_dir,
            self.target_dir / TARGET_LAYOUT.skills_dir,
            self.target_dir / TARGET_LAYOUT.tools_dir,
        ]


def get_sync_paths(source_root: Path | None = None, target_dir: Path | None = None) -> SyncPaths:
    """Build SyncPaths from explicit arguments, falling back to the environment.

    Args:
        source_root: Explicit source root, overrides OPENCODE_SYNC_SOURCE
        target_dir: Explicit target directory, overrides OPENCODE_SYNC_TARGET

    Returns:
        SyncPaths: Resolved paths for this run
    """
    load_dotenv()
    data = {}
    source = source_root or os.getenv(SOURCE_ENV)
    target = target_dir or os.getenv(TARGET_ENV)
    if source:
        data["source_root"] = source
    if target:
        data["target_dir"] = target
    paths = SyncPaths(**data)
    logger.debug(f"Resolved paths: source={paths.source_root} target={paths.target_dir}")
    return paths
