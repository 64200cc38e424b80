"""
opencode-sync - copy or symlink an OpenCode config repository into ~/.config/opencode
"""

from opencode_sync.cli import cli
from opencode_sync.sync import ConfigSynchronizer, SyncError, SyncOptions
from opencode_sync.utils.paths import SyncMode, SyncPaths, get_sync_paths

__version__ = "0.1.0"
__all__ = [
    "cli",
    "ConfigSynchronizer",
    "SyncError",
    "SyncMode",
    "SyncOptions",
    "SyncPaths",
    "get_sync_paths",
]
