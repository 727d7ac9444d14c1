"""Secure Git CLI - find AI co-authors hiding in your Git history.

Usage:
    secure-git scan [DIRECTORY] [options]
    secure-git scan ~/dev --jobs 4
    secure-git scan --json-only > report.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import Config, ConfigError, expand_path, load_config, save_config
from .coordinator import analyze_repositories, default_workers
from .locator import locate_repositories
from .patterns import DEFAULT_PATTERNS
from .report import render_report, report_to_dict

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _prompt_directory() -> str:
    value = click.prompt(
        "Please enter the main development directory",
        default="", show_default=False,
    )
    value = expand_path(value)
    if not value:
        raise click.ClickException("No directory provided.")
    return value


def _resolve_directory(directory: str | None, interactive: bool, save: bool) -> Path:
    """Pick the directory to scan: argument, then config file, then a prompt.

    A directory that does not exist gets one re-prompt. Directories chosen
    on the command line or at the prompt are saved for the next run.
    """
    from_config = False
    if directory:
        value = expand_path(directory)
    else:
        try:
            value = load_config().dev_directory
            from_config = True
        except ConfigError as e:
            logger.debug("%s", e)
            if not interactive:
                raise click.ClickException(
                    "No directory given and no saved configuration found."
                )
            value = _prompt_directory()

    if not Path(value).is_dir():
        if not interactive:
            raise click.ClickException(f"Directory {value} does not exist.")
        console.print(
            f"[yellow]Directory {escape(value)} does not exist. Please provide a valid directory.[/]",
            soft_wrap=True,
        )
        value = _prompt_directory()
        from_config = False
        if not Path(value).is_dir():
            raise click.ClickException(f"Directory {value} does not exist.")

    if save and not from_config:
        try:
            path = save_config(Config(dev_directory=value))
            if interactive:
                console.print(f"Development directory saved to: {path}", style="dim", soft_wrap=True)
        except ConfigError as e:
            logger.warning("%s", e)

    return Path(value).resolve()


@click.group()
@click.version_option(version=__version__)
def cli():
    """Secure Git - detect AI co-authors in your Git repositories.

    Scans a development directory for Git repositories and reports commits
    whose Co-authored-by trailers point at AI assistants.
    """
    pass


@cli.command()
@click.argument("directory", required=False)
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=None, help="Parallel workers (default: CPU count)")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
@click.option("--no-save", is_flag=True, help="Do not remember DIRECTORY for future runs")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def scan(directory: str | None, jobs: int | None, json_only: bool, no_save: bool, verbose: bool):
    """Scan DIRECTORY for repositories with suspicious co-authors.

    Without DIRECTORY the directory saved in ~/.secure-git.env is used,
    and you are prompted for one if none is saved.

    Examples:

        secure-git scan ~/dev

        secure-git scan --jobs 2 --verbose

        secure-git scan ~/dev --json-only --no-save
    """
    _setup_logging(verbose)

    if not json_only:
        console.print()
        console.print(Panel.fit(
            f"[bold cyan]Secure Git v{__version__}[/] - Suspicious Co-author Detector",
            border_style="cyan",
        ))

    root = _resolve_directory(directory, interactive=not json_only, save=not no_save)

    if not json_only:
        console.print(f"Searching for Git repositories in: [bold]{escape(str(root))}[/]", soft_wrap=True)

    try:
        repos = locate_repositories(root)
    except OSError as e:
        raise click.ClickException(f"Error finding Git repositories: {e}")

    if not repos:
        if json_only:
            click.echo(json.dumps(report_to_dict([]), indent=2))
        else:
            console.print("[yellow]No Git repositories found in the specified directory.[/]")
        return

    workers = jobs or default_workers()

    if json_only:
        results = analyze_repositories(repos, DEFAULT_PATTERNS, max_workers=workers)
        click.echo(json.dumps(report_to_dict(results), indent=2))
        return

    console.print(f"Found {len(repos)} Git repositories. Analyzing with {workers} workers...")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("Analyzing...", total=len(repos))

        def on_progress(done, total, repo_path):
            progress.update(task, description=Path(repo_path).name, completed=done)

        results = analyze_repositories(
            repos, DEFAULT_PATTERNS, max_workers=workers, progress_callback=on_progress,
        )
        progress.update(task, description="Done!")

    skipped = len(repos) - len(results)
    if skipped:
        console.print(f"[yellow]{skipped} repositories could not be analyzed and are not in the report.[/]")

    render_report(results, console)


@cli.command()
def patterns():
    """List the co-author patterns that are flagged."""
    console.print()
    table = Table(title="Suspicious Co-author Patterns", show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Pattern (case-insensitive)", style="bold")

    for i, pattern in enumerate(DEFAULT_PATTERNS, start=1):
        table.add_row(str(i), Text(pattern.pattern))

    console.print(table)


@cli.command()
def version():
    """Show version information."""
    console.print(f"secure-git v{__version__}")
    console.print("Suspicious co-author detector for Git repositories")


if __name__ == "__main__":
    cli()
