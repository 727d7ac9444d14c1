"""Per-repository analysis.

Counts the commits reachable from HEAD, pulls the fuller-format log and
scans it line by line for suspicious co-author trailers.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import git
from .patterns import DEFAULT_PATTERNS, PatternSet

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*(\d+)")


class AnalysisError(Exception):
    """A single repository could not be analyzed."""


@dataclass(frozen=True)
class RepositoryResult:
    """Scan outcome for one repository."""

    path: str
    total_commits: int = 0
    # matching log lines, one per matching pattern
    suspicious_commits: int = 0
    suspicious_authors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def contaminated(self) -> bool:
        return self.suspicious_commits > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "total_commits": self.total_commits,
            "suspicious_commits": self.suspicious_commits,
            "suspicious_authors": list(self.suspicious_authors),
        }


def parse_count(output: str) -> int:
    """Leading integer of `output`, or 0 when there is none."""
    match = _LEADING_INT.match(output)
    return int(match.group(1)) if match else 0


def scan_log(text: str, patterns: PatternSet = DEFAULT_PATTERNS) -> tuple[int, list[str]]:
    """Scan log text and return (matching line count, distinct trailers).

    Every pattern that matches a line adds one to the count, so a line hit
    by both a vendor pattern and the domain catch-all counts twice.
    """
    count = 0
    authors: list[str] = []
    seen: set[str] = set()

    for line in text.split("\n"):
        for match in patterns.match(line):
            count += 1
            if match.text and match.text not in seen:
                seen.add(match.text)
                authors.append(match.text.strip())

    return count, authors


def _fetch_log(repo: str) -> str:
    try:
        return git.log_all_refs(repo)
    except git.GitError as e:
        logger.debug("Log of all refs failed for %s, using current branch: %s", repo, e)
    try:
        return git.log_current_branch(repo)
    except git.GitError as e:
        raise AnalysisError(f"Error getting commit logs in {repo}: {e}") from e


def analyze_repository(
    repo_path: str | Path,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> RepositoryResult:
    """Analyze one repository for suspicious co-authors.

    Raises AnalysisError when the commit count or both log queries fail.
    """
    path = str(repo_path)

    try:
        total = parse_count(git.count_commits(path))
    except git.GitError as e:
        raise AnalysisError(f"Error counting commits in {path}: {e}") from e

    if total == 0:
        return RepositoryResult(path=path)

    suspicious, authors = scan_log(_fetch_log(path), patterns)
    logger.debug("%s: %d commits, %d suspicious", path, total, suspicious)

    return RepositoryResult(
        path=path,
        total_commits=total,
        suspicious_commits=suspicious,
        suspicious_authors=tuple(authors),
    )
