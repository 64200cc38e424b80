"""
Config Synchronization Module
=============================

This module materializes the config repository's rules, agents, skills and
tools into the tool configuration directory, by copy or by symlink, after
taking a backup of whatever was there before.
"""

from pathlib import Path

from opencode_sync.sync.backup import create_backup, needs_backup
from opencode_sync.sync.errors import ConfigurationError
from opencode_sync.sync.executor import SyncReport, apply_plan
from opencode_sync.sync.manifest import SourceManifest
from opencode_sync.sync.plan import SyncAction, SyncOptions, compute_sync_plan
from opencode_sync.utils.file import ensure_real_dir
from opencode_sync.utils.logging import logger
from opencode_sync.utils.paths import TARGET_LAYOUT, SyncPaths


class ConfigSynchronizer:
    """Synchronizes a config repository into a target configuration directory."""

    def __init__(self, paths: SyncPaths, options: SyncOptions | None = None):
        """Initialize the ConfigSynchronizer.

        Args:
            paths: Source root and target directory
            options: Mode, backup and dry-run settings; defaults to a copy with backup
        """
        self.paths = paths
        self.options = options or SyncOptions()

    @property
    def target_dir(self) -> Path:
        return self.paths.target_dir

    def validate(self) -> None:
        """Reject path combinations that would sync the source into itself.

        Raises:
            ConfigurationError: If the target directory is, or sits inside, the source root
        """
        source = self.paths.source_root.resolve()
        target = self.target_dir.resolve()
        if target == source or source in target.parents:
            raise ConfigurationError(f"Target directory {target} must not be inside the source root {source}")

    def plan(self) -> list[SyncAction]:
        """Scan the source and compute the sync plan without writing anything.

        Raises:
            ConfigurationError: If the target directory is inside the source root
            SourceNotFoundError: If the rules file or agents directory is missing
            SourceAccessError: If a source path cannot be read
        """
        self.validate()
        manifest = SourceManifest.scan(self.paths)
        return compute_sync_plan(manifest, self.options, self.target_dir)

    def run(self) -> SyncReport:
        """Run the sync.

        Source problems and backup failures abort before the target is
        touched. Failures on individual entries are collected in the report.

        Returns:
            SyncReport: Counts per category, failures and the backup location

        Raises:
            ConfigurationError: If the target directory is inside the source root
            SourceNotFoundError: If the rules file or agents directory is missing
            SourceAccessError: If a source path cannot be read
            BackupError: If a backup was requested but could not be written
        """
        plan = self.plan()

        if self.options.dry_run:
            logger.debug(f"Dry run, {len(plan)} actions planned")
            return SyncReport(planned=plan, dry_run=True)

        backup_dir = None
        if self.options.backup and needs_backup(self.paths):
            backup_dir = create_backup(self.paths)
            logger.debug(f"Backup created at {backup_dir}")

        self.target_dir.mkdir(parents=True, exist_ok=True)
        ensure_real_dir(self.target_dir / TARGET_LAYOUT.agents_dir)

        report = apply_plan(plan, self.target_dir)
        report.backup_dir = backup_dir
        return report
