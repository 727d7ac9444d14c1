"""Thin wrapper around the `git` command-line tool.

Every question the scanner asks about a repository goes through one of the
functions below. Nothing here reads `.git` internals directly.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_DIR = ".git"


class GitError(Exception):
    """A git invocation failed or git could not be started."""


@dataclass
class GitOutput:
    returncode: int
    stdout: str
    stderr: str


def run_git(args: list[str], repo: str | Path) -> GitOutput:
    """Run `git -C <repo> <args>` and capture its output.

    No timeout is applied; the call blocks until git exits.
    """
    cmd = ["git", "-C", str(repo), *args]
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as e:
        raise GitError(f"git executable not found: {e}") from e
    except OSError as e:
        # permission denied, out of file descriptors or memory at fork
        raise GitError(f"Could not run git in {repo}: {e}") from e
    return GitOutput(proc.returncode, proc.stdout, proc.stderr)


def _checked(args: list[str], repo: str | Path) -> str:
    out = run_git(args, repo)
    if out.returncode != 0:
        raise GitError(
            f"git {' '.join(args)} failed in {repo} "
            f"(exit {out.returncode}): {out.stderr.strip()[:200]}"
        )
    return out.stdout


def is_valid_repository(path: str | Path) -> bool:
    """True if `path` has a .git directory and `git status` succeeds there."""
    if not (Path(path) / GIT_DIR).exists():
        return False
    try:
        return run_git(["status"], path).returncode == 0
    except GitError:
        return False


def count_commits(repo: str | Path) -> str:
    """Raw output of `git rev-list --count HEAD`."""
    return _checked(["rev-list", "--count", "HEAD"], repo)


def log_all_refs(repo: str | Path) -> str:
    """Fuller-format log of every reachable ref."""
    return _checked(["log", "--format=fuller", "--all"], repo)


def log_current_branch(repo: str | Path) -> str:
    """Fuller-format log of the checked-out branch only."""
    return _checked(["log", "--format=fuller"], repo)
