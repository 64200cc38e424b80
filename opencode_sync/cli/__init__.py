"""
CLI module for opencode-sync.
"""

from opencode_sync.cli.main import app

def cli():
    """Entry point for the CLI."""
    app()

__all__ = ['app', 'cli']
