"""Repository discovery.

Walks a directory tree and collects every directory holding a valid `.git`
metadata directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from . import git

logger = logging.getLogger(__name__)


def locate_repositories(
    root: str | Path,
    is_valid: Callable[[str], bool] | None = None,
) -> list[str]:
    """Find all Git repositories under `root`.

    Returns absolute repository paths in walk order. Raises OSError if
    `root` is missing or not a directory. Unreadable subdirectories are
    skipped without aborting the walk.
    """
    is_valid = is_valid or git.is_valid_repository
    root = Path(root).expanduser().resolve()
    if not root.exists():
        raise FileNotFoundError(f"Directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    repos: list[str] = []

    def onerror(err: OSError) -> None:
        # permission denied, vanished entries, broken links
        _ = err

    for dirpath, dirnames, _filenames in os.walk(root, onerror=onerror):
        if git.GIT_DIR not in dirnames:
            continue
        # never descend into git's own internals
        dirnames.remove(git.GIT_DIR)
        if os.path.islink(os.path.join(dirpath, git.GIT_DIR)):
            # a symlinked .git is not a metadata directory
            continue
        if is_valid(dirpath):
            logger.debug("Found repository %s", dirpath)
            repos.append(dirpath)
        else:
            logger.debug("Ignoring invalid repository %s", dirpath)

    return repos
