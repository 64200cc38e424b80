"""
Main CLI entry point for opencode-sync.
"""

# Standard library imports
import importlib.metadata
from pathlib import Path
from typing import Optional

# Third-party imports
import typer

# Local imports
from opencode_sync.sync import (
    Category,
    ConfigSynchronizer,
    ConfigurationError,
    SourceNotFoundError,
    SyncError,
    SyncOptions,
    SyncReport,
)
from opencode_sync.utils.paths import SyncMode, SyncPaths, get_sync_paths
from opencode_sync.utils.rich_console import get_console_logger, print_panel, print_table


logger = get_console_logger()


app = typer.Typer(
    help="Sync this config repository's rules, agents, skills and tools into ~/.config/opencode.",
    add_completion=False,
)


CATEGORY_LABELS = {
    Category.agents: ("agent", "agents"),
    Category.skills: ("skill file", "skill files"),
    Category.tools: ("tool", "tools"),
}


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"opencode-sync version: {importlib.metadata.version('opencode-sync')}")
        raise typer.Exit()


def show_header(paths: SyncPaths, options: SyncOptions) -> None:
    print_panel("OpenCode Config Sync", style="bold blue")
    logger.info(f"Source: {paths.source_root}")
    logger.info(f"Target: {paths.target_dir}")
    logger.info(f"Using {options.mode.value} mode...")


def summary_lines(report: SyncReport) -> list[str]:
    """Build the per-category summary, e.g. "Synced 17 agents"."""
    planned = {action.category for action in report.planned}
    lines = []
    for category in Category:
        if category not in planned:
            continue
        count = report.count(category)
        if category == Category.config:
            if count:
                lines.append("Synced opencode.json")
        elif category == Category.rules:
            if count:
                lines.append("Synced AGENTS.md")
        else:
            singular, plural = CATEGORY_LABELS[category]
            lines.append(f"Synced {count} {singular if count == 1 else plural}")
    return lines


def show_plan(report: SyncReport) -> None:
    rows = [
        [action.action.value, str(action.source), str(action.target)]
        for action in report.planned
    ]
    print_table(["Action", "Source", "Target"], rows, title="Sync plan (dry run)")


def show_failures(report: SyncReport) -> None:
    rows = [[str(failure.action.target), failure.error] for failure in report.failures]
    print_table(["Target", "Error"], rows, title="Failed entries", stderr=True)
    logger.error(f"{len(report.failures)} of {len(report.planned)} entries failed to sync")


def show_footer(paths: SyncPaths) -> None:
    typer.echo("")
    typer.echo("To update in the future:")
    typer.echo(f"  cd {paths.source_root}")
    typer.echo("  git pull")
    typer.echo("  sync-config")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def sync_config(
    ctx: typer.Context,
    no_backup: bool = typer.Option(False, "--no-backup", help="Skip backup of existing config"),
    symlink: bool = typer.Option(False, "--symlink", help="Use symlinks instead of copying (stays in sync)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be synced without writing anything"),
    source: Optional[Path] = typer.Option(
        None, "--source", file_okay=False, help="Config repository root (default: current directory, or this checkout when installed editable)"
    ),
    target: Optional[Path] = typer.Option(
        None, "--target", file_okay=False, help="Target configuration directory (default: ~/.config/opencode)"
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """Copy or symlink the config repository into the OpenCode configuration directory."""
    paths = get_sync_paths(source, target)
    options = SyncOptions(
        mode=SyncMode.symlink if symlink else SyncMode.copy,
        backup=not no_backup,
        dry_run=dry_run,
    )
    show_header(paths, options)

    synchronizer = ConfigSynchronizer(paths, options)
    try:
        report = synchronizer.run()
    except ConfigurationError as error:
        logger.error(error.message)
        typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(2)
    except SourceNotFoundError as error:
        logger.error(error.message)
        if source is None:
            logger.error("Run sync-config from inside the config repository or pass --source PATH")
        raise typer.Exit(1)
    except SyncError as error:
        logger.error(error.message)
        raise typer.Exit(1)
    except OSError as error:
        logger.error(f"Could not prepare {paths.target_dir}: {error}")
        raise typer.Exit(1)

    if report.dry_run:
        show_plan(report)
        return

    if report.backup_dir:
        logger.success(f"Backup created: {report.backup_dir}")
    for line in summary_lines(report):
        logger.success(line)

    if not report.ok:
        show_failures(report)
        raise typer.Exit(1)

    logger.success("Configuration synced successfully!")
    show_footer(paths)


if __name__ == "__main__":
    app()
