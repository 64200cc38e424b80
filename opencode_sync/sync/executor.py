"""
Plan Executor
=============

Applies a sync plan to the filesystem. Entries are independent, so a
failure on one is recorded and the remaining entries are still attempted.
"""

import os
import shutil
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from opencode_sync.sync.manifest import Category
from opencode_sync.sync.plan import SyncAction
from opencode_sync.utils.file import ensure_real_dir, unlink_path
from opencode_sync.utils.logging import logger, timeit
from opencode_sync.utils.paths import SyncMode


@dataclass
class SyncFailure:
    action: SyncAction
    error: str


@dataclass
class SyncReport:
    """Outcome of a sync run."""

    synced: Counter = field(default_factory=Counter)
    failures: list[SyncFailure] = field(default_factory=list)
    backup_dir: Path | None = None
    planned: list[SyncAction] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures

    def count(self, category: Category) -> int:
        return self.synced[category]


def _ensure_parent(target: Path, target_dir: Path) -> None:
    """Make every directory between the target directory and the file a real directory."""
    # the target directory itself may be a user's symlink and is kept
    target_dir.mkdir(parents=True, exist_ok=True)
    current = target_dir
    for part in target.parent.relative_to(target_dir).parts:
        current = current / part
        if current.is_symlink():
            # left by older syncs that linked whole category directories
            logger.debug(f"Replacing directory symlink {current}")
        ensure_real_dir(current)


def materialize(action: SyncAction, target_dir: Path) -> None:
    """Write a single plan entry, replacing whatever occupied the target path.

    Args:
        action: The entry to write
        target_dir: Target configuration directory containing action.target

    Raises:
        OSError: If a parent directory, the removal or the write fails
    """
    _ensure_parent(action.target, target_dir)
    unlink_path(action.target)
    if action.action == SyncMode.symlink:
        os.symlink(action.source, action.target)
    else:
        shutil.copy2(action.source, action.target)


@timeit
def apply_plan(plan: list[SyncAction], target_dir: Path) -> SyncReport:
    """Apply every action in a plan, best-effort.

    Args:
        plan: Actions from compute_sync_plan
        target_dir: Target configuration directory the plan writes into

    Returns:
        SyncReport: Per-category counts and per-entry failures
    """
    report = SyncReport(planned=list(plan))
    for action in plan:
        try:
            materialize(action, target_dir)
        except OSError as error:
            logger.debug(f"Failed: {action.describe()}: {error}")
            report.failures.append(SyncFailure(action=action, error=str(error)))
            continue
        logger.debug(action.describe())
        report.synced[action.category] += 1
    return report
