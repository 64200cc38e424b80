"""
Source Manifest Module
======================

Scans a source repository into the list of files the synchronizer knows
about. The manifest is rebuilt on every run; nothing is cached between
invocations.
"""

import errno
import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from opencode_sync.sync.errors import SourceAccessError, SourceNotFoundError
from opencode_sync.utils.logging import logger
from opencode_sync.utils.paths import TARGET_LAYOUT, SyncPaths


class Category(str, Enum):
    """Kinds of files the synchronizer materializes."""

    config = "config"
    rules = "rules"
    agents = "agents"
    skills = "skills"
    tools = "tools"


class ManifestEntry(BaseModel):
    """A single source file and where it lands, relative to the target directory."""

    category: Category
    source: Path = Field(..., description="Absolute path of the source file")
    target: Path = Field(..., description="Path relative to the target directory")


def _check_readable(path: Path) -> None:
    if not os.access(path, os.R_OK):
        raise SourceAccessError(path, PermissionError(errno.EACCES, os.strerror(errno.EACCES), str(path)))


def _list_dir(path: Path) -> list[Path]:
    """List visible entries of a directory, sorted by name."""
    try:
        entries = sorted(path.iterdir())
    except OSError as error:
        raise SourceAccessError(path, error) from error
    return [entry for entry in entries if not entry.name.startswith(".")]


def _walk_files(path: Path) -> list[Path]:
    """Recursively list visible regular files below a directory.

    Symlinked directories are not followed, so a link cycle cannot expand.
    """
    files: list[Path] = []
    for entry in _list_dir(path):
        if entry.is_symlink() and entry.is_dir():
            logger.debug(f"Not following directory symlink {entry}")
        elif entry.is_dir():
            files.extend(_walk_files(entry))
        elif entry.is_file():
            files.append(entry)
    return files


class SourceManifest:
    """The fixed set of source files to sync, computed from a source root."""

    def __init__(self, source_root: Path, entries: list[ManifestEntry]):
        self.source_root = source_root
        self.entries = entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def by_category(self, category: Category) -> list[ManifestEntry]:
        """Get the entries belonging to one category."""
        return [entry for entry in self.entries if entry.category == category]

    @classmethod
    def scan(cls, paths: SyncPaths) -> "SourceManifest":
        """Scan the source root and build the manifest.

        Args:
            paths: Source and target locations for this run

        Returns:
            SourceManifest: Entries for every file to sync

        Raises:
            SourceNotFoundError: If the rules file or agents directory is missing
            SourceAccessError: If a source path exists but cannot be read
        """
        root = paths.source_root.resolve()
        paths = paths.model_copy(update={"source_root": root})
        entries: list[ManifestEntry] = []

        rules_file = paths.source_rules_file
        if not rules_file.is_file():
            raise SourceNotFoundError(rules_file, "rules file")
        agents_dir = paths.source_agents_dir
        if not agents_dir.is_dir():
            raise SourceNotFoundError(agents_dir, "agents directory")

        config_file = paths.source_config_file
        if config_file.is_file():
            _check_readable(config_file)
            entries.append(ManifestEntry(
                category=Category.config,
                source=config_file,
                target=Path(TARGET_LAYOUT.config_file),
            ))
        else:
            logger.debug(f"No config file at {config_file}, skipping")

        _check_readable(rules_file)
        entries.append(ManifestEntry(
            category=Category.rules,
            source=rules_file,
            target=Path(TARGET_LAYOUT.rules_file),
        ))

        entries.extend(cls._scan_flat(agents_dir, Category.agents, TARGET_LAYOUT.agents_dir))

        skills_dir = paths.source_skills_dir
        if skills_dir.is_dir():
            entries.extend(cls._scan_skills(skills_dir))
        else:
            logger.debug(f"No skills directory at {skills_dir}, skipping")

        tools_dir = paths.source_tools_dir
        if tools_dir.is_dir():
            entries.extend(cls._scan_flat(tools_dir, Category.tools, TARGET_LAYOUT.tools_dir))
        else:
            logger.debug(f"No tools directory at {tools_dir}, skipping")

        logger.debug(f"Scanned {len(entries)} manifest entries under {root}")
        return cls(root, entries)

    @staticmethod
    def _scan_flat(directory: Path, category: Category, target_dir: str) -> list[ManifestEntry]:
        entries = []
        for entry in _list_dir(directory):
            if not entry.is_file():
                logger.debug(f"Ignoring non-file {entry} in {category.value}")
                continue
            _check_readable(entry)
            entries.append(ManifestEntry(
                category=category,
                source=entry,
                target=Path(target_dir) / entry.name,
            ))
        return entries

    @staticmethod
    def _scan_skills(skills_dir: Path) -> list[ManifestEntry]:
        entries = []
        for skill in _list_dir(skills_dir):
            if not skill.is_dir():
                logger.debug(f"Ignoring {skill}: skills are directories")
                continue
            for file in _walk_files(skill):
                _check_readable(file)
                entries.append(ManifestEntry(
                    category=Category.skills,
                    source=file,
                    target=Path(TARGET_LAYOUT.skills_dir) / file.relative_to(skills_dir),
                ))
        return entries
