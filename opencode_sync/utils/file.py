"""
File Utility Functions
==================

This module provides the filesystem primitives the synchronizer is built on.
Unlike plain ``shutil`` calls, every helper here treats a symlink as a path of
its own and never writes through it.
"""

import os
import shutil
from pathlib import Path


def path_occupied(path: Path) -> bool:
    """
    Check whether anything occupies a path, including dangling symlinks.

    Args:
        path: Path to check

    Returns:
        bool: True if a file, directory or symlink exists at the path
    """
    return path.is_symlink() or path.exists()


def unlink_path(path: Path) -> bool:
    """
    Remove a file or symlink so the path can be materialized again.

    Args:
        path: Path to remove

    Returns:
        bool: True if something was removed, False if the path was free

    Raises:
        IsADirectoryError: If a real directory occupies the path
        OSError: If removal fails
    """
    if path.is_symlink():
        path.unlink()
        return True
    if not path.exists():
        return False
    if path.is_dir():
        raise IsADirectoryError(f"Refusing to replace directory: {path}")
    path.unlink()
    return True


def ensure_real_dir(path: Path) -> None:
    """
    Ensure a path is a real directory, never a symlink to one.

    A symlinked directory is replaced by an empty real directory, leaving the
    link's destination untouched. Parents are created as needed.

    Args:
        path: Directory path

    Raises:
        NotADirectoryError: If a regular file occupies the path
    """
    if path.is_symlink():
        path.unlink()
    elif path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Expected a directory at {path}")
    path.mkdir(parents=True, exist_ok=True)


def copy_preserving_links(source: Path, destination: Path) -> None:
    """
    Copy a file, directory tree or symlink to a new location.

    Symlinks are recreated as symlinks pointing at the same destination, so
    a copy records what was on disk rather than what the link resolved to.

    Args:
        source: Existing path to copy
        destination: Path to create
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    if source.is_symlink():
        os.symlink(os.readlink(source), destination)
    elif source.is_dir():
        shutil.copytree(source, destination, symlinks=True)
    else:
        shutil.copy2(source, destination)
