"""
Backup Module
=============

Snapshots the well-known parts of a target configuration directory into a
sibling directory named ``<target>.backup.<timestamp>`` before a sync
overwrites them.
"""

from datetime import datetime
from pathlib import Path

from opencode_sync.sync.errors import BackupError
from opencode_sync.utils.file import copy_preserving_links, path_occupied
from opencode_sync.utils.logging import logger
from opencode_sync.utils.paths import SyncPaths

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def needs_backup(paths: SyncPaths) -> bool:
    """Check whether the target already holds content a sync could overwrite."""
    return any(path_occupied(entry) for entry in paths.target_entries())


def backup_dir_for(target_dir: Path, timestamp: datetime) -> Path:
    """Get a fresh backup directory path for a target and timestamp.

    A numeric suffix is appended when a backup with the same timestamp
    already exists, so each call maps to a new directory.
    """
    base = target_dir.with_name(f"{target_dir.name}.backup.{timestamp.strftime(TIMESTAMP_FORMAT)}")
    candidate = base
    counter = 1
    while path_occupied(candidate):
        candidate = base.with_name(f"{base.name}_{counter}")
        counter += 1
    return candidate


def create_backup(paths: SyncPaths, timestamp: datetime | None = None) -> Path:
    """Copy existing target content into a new timestamped backup directory.

    Each well-known entry (rules file, config file, agents, skills and tools
    directories) is copied independently; entries that do not exist are
    skipped.

    Args:
        paths: Source and target locations for this run
        timestamp: Backup timestamp, defaults to now

    Returns:
        Path: The backup directory that was created

    Raises:
        BackupError: If the backup directory or any copy could not be written
    """
    backup_dir = backup_dir_for(paths.target_dir, timestamp or datetime.now())
    try:
        backup_dir.mkdir(parents=True)
        for entry in paths.target_entries():
            if not path_occupied(entry):
                continue
            copy_preserving_links(entry, backup_dir / entry.name)
            logger.debug(f"Backed up {entry}")
    except OSError as error:
        raise BackupError(f"Failed to back up {paths.target_dir} to {backup_dir}: {error}") from error
    return backup_dir
