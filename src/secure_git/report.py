"""Contamination report.

Aggregates per-repository results and renders them to a rich console, or
to a plain dict for JSON output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .analyzer import RepositoryResult

RECOMMENDATIONS = (
    "BACK UP THE .git DIRECTORY BEFORE PROCEEDING",
    "Review suspicious commits using: git log --format=fuller",
    "Consider rewriting history with: git rebase -i",
    "Configure Git hooks to prevent future contamination",
)


@dataclass
class ReportSummary:
    total: int = 0
    contaminated: int = 0
    clean: int = 0
    suspicious_commits: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "contaminated": self.contaminated,
            "clean": self.clean,
            "suspicious_commits": self.suspicious_commits,
        }


def summarize(results: Iterable[RepositoryResult]) -> ReportSummary:
    summary = ReportSummary()
    for r in results:
        summary.total += 1
        if r.contaminated:
            summary.contaminated += 1
            summary.suspicious_commits += r.suspicious_commits
        else:
            summary.clean += 1
    return summary


def _sorted(results: Iterable[RepositoryResult]) -> list[RepositoryResult]:
    return sorted(results, key=lambda r: r.path)


def report_to_dict(results: Iterable[RepositoryResult]) -> dict[str, Any]:
    ordered = _sorted(results)
    return {
        "summary": summarize(ordered).to_dict(),
        "repositories": [r.to_dict() for r in ordered],
    }


def render_report(results: Iterable[RepositoryResult], console: Console) -> ReportSummary:
    """Print the full report. Returns the summary it printed."""
    ordered = _sorted(results)
    summary = summarize(ordered)

    console.print()
    console.print(Panel.fit(
        "[bold]SECURE GIT - SUSPICIOUS CO-AUTHOR REPORT[/]",
        border_style="cyan",
    ))

    stats = Table(title="General Statistics", show_header=False, border_style="dim")
    stats.add_column("Key", style="bold")
    stats.add_column("Value", justify="right")
    stats.add_row("Repositories analyzed", str(summary.total))
    stats.add_row("Contaminated repositories", f"[red]{summary.contaminated}[/]")
    stats.add_row("Clean repositories", f"[green]{summary.clean}[/]")
    console.print(stats)

    if summary.contaminated:
        _print_contaminated(ordered, console)
    if summary.clean:
        _print_clean(ordered, console)

    console.print()
    if summary.contaminated:
        _print_alert(summary, console)
    else:
        console.print("[bold green]All repositories are clean[/]")

    return summary


def _print_contaminated(results: list[RepositoryResult], console: Console) -> None:
    console.print()
    console.print("[bold red]Contaminated Repositories[/]")
    for r in results:
        if not r.contaminated:
            continue
        console.print()
        console.print(f"  [bold]{escape(r.path)}[/]")
        console.print(f"    Total commits: {r.total_commits:,}")
        console.print(f"    Suspicious commits: [red]{r.suspicious_commits:,}[/]")
        if r.suspicious_authors:
            console.print("    Detected co-authors:")
            for author in r.suspicious_authors:
                # trailers contain <email>, keep rich from reading them as markup
                console.print(f"      - {author}", markup=False)


def _print_clean(results: list[RepositoryResult], console: Console) -> None:
    console.print()
    console.print("[bold green]Clean Repositories[/]")
    for r in results:
        if not r.contaminated:
            console.print(f"  {r.path} ({r.total_commits:,} commits)", markup=False)


def _print_alert(summary: ReportSummary, console: Console) -> None:
    lines = [
        f"{summary.contaminated} contaminated repositories were found",
        f"with a total of {summary.suspicious_commits} suspicious commits",
        "",
        "[bold]Recommendations:[/]",
    ]
    lines += [f"  {i}. {rec}" for i, rec in enumerate(RECOMMENDATIONS, start=1)]
    lines += [
        "",
        "[bold]Modifying commit history is a delicate process that can lead to",
        "data loss if not handled properly.[/]",
    ]
    console.print(Panel.fit(
        "\n".join(lines),
        title="Security Alert",
        border_style="red",
    ))
