"""
Utility modules for opencode-sync.
"""

from opencode_sync.utils.paths import SyncPaths, get_sync_paths

__all__ = ["SyncPaths", "get_sync_paths"]
