"""Shared fixtures: throwaway git repositories."""

import shutil
import subprocess

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo, *args):
    subprocess.run(
        [
            "git",
            "-c", "user.name=Test User",
            "-c", "user.email=test@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=repo, check=True, capture_output=True,
    )


@pytest.fixture
def make_repo():
    """Factory: make_repo(path, messages) creates a repo with one commit per message."""

    def _make(path, messages=()):
        path.mkdir(parents=True, exist_ok=True)
        _git(path, "init", "-q")
        for msg in messages:
            _git(path, "commit", "-q", "--allow-empty", "-m", msg)
        return path

    return _make
