"""
Config synchronization package: manifest scanning, planning, backup and execution.
"""

from .errors import BackupError, ConfigurationError, SourceAccessError, SourceNotFoundError, SyncError
from .executor import SyncReport, apply_plan
from .file_sync import ConfigSynchronizer
from .manifest import Category, ManifestEntry, SourceManifest
from .plan import SyncAction, SyncOptions, compute_sync_plan

__all__ = [
    'BackupError',
    'Category',
    'ConfigSynchronizer',
    'ConfigurationError',
    'ManifestEntry',
    'SourceAccessError',
    'SourceManifest',
    'SourceNotFoundError',
    'SyncAction',
    'SyncError',
    'SyncOptions',
    'SyncReport',
    'apply_plan',
    'compute_sync_plan',
]
