"""Bounded-parallel analysis of many repositories."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable

from .analyzer import AnalysisError, RepositoryResult, analyze_repository
from .patterns import DEFAULT_PATTERNS, PatternSet

logger = logging.getLogger(__name__)


def default_workers() -> int:
    return os.cpu_count() or 1


def analyze_repositories(
    repo_paths: Iterable[str],
    patterns: PatternSet = DEFAULT_PATTERNS,
    max_workers: int | None = None,
    progress_callback: Callable[[int, int, str], None] | None = None,
    analyze: Callable[[str, PatternSet], RepositoryResult] | None = None,
) -> list[RepositoryResult]:
    """Analyze every repository on a fixed-size worker pool.

    Repositories that fail are logged and left out of the result. Returns
    once every repository has been processed; result order is unspecified.
    """
    analyze = analyze or analyze_repository
    paths = list(repo_paths)
    results: list[RepositoryResult] = []
    lock = threading.Lock()

    def work(path: str) -> None:
        try:
            result = analyze(path, patterns)
        except AnalysisError as e:
            logger.warning("Error analyzing repository %s: %s", path, e)
            return
        with lock:
            results.append(result)

    if not paths:
        return results

    workers = max(1, max_workers or default_workers())
    logger.debug("Analyzing %d repositories with %d workers", len(paths), workers)

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = {ex.submit(work, path): path for path in paths}
        for done, fut in enumerate(as_completed(futs), start=1):
            fut.result()
            if progress_callback:
                progress_callback(done, len(paths), futs[fut])

    return results
