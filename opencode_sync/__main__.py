"""
Main entry point for the opencode-sync CLI.
"""

from opencode_sync.cli import cli


def main() -> None:
    """Main function for the opencode-sync CLI."""
    cli()


if __name__ == "__main__":
    main()
