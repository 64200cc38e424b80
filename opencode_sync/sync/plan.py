"""
Sync planning. Turns a manifest and options into concrete actions without
touching the filesystem.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from opencode_sync.sync.manifest import Category, SourceManifest
from opencode_sync.utils.paths import SyncMode


class SyncOptions(BaseModel):
    """Options for a single sync invocation."""

    mode: SyncMode = SyncMode.copy
    backup: bool = True
    dry_run: bool = False


class SyncAction(BaseModel):
    """Materialize one source file at one absolute target path."""

    category: Category
    source: Path
    target: Path = Field(..., description="Absolute target path")
    action: SyncMode

    def describe(self) -> str:
        verb = "link" if self.action == SyncMode.symlink else "copy"
        return f"{verb} {self.source} -> {self.target}"


def compute_sync_plan(manifest: SourceManifest, options: SyncOptions, target_dir: Path) -> list[SyncAction]:
    """Compute the actions that bring the target directory in line with the manifest.

    Args:
        manifest: Scanned source manifest
        options: Sync options; only the mode affects the plan
        target_dir: Target configuration directory

    Returns:
        list[SyncAction]: One action per manifest entry, in manifest order
    """
    return [
        SyncAction(
            category=entry.category,
            source=entry.source,
            target=target_dir / entry.target,
            action=options.mode,
        )
        for entry in manifest
    ]
