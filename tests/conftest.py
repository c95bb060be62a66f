"""Shared test fixtures for gitfacts tests."""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

AUTHOR_DATE = "2024-01-02T03:04:05+02:00"
COMMITTER_DATE = "2024-01-02T04:05:06-05:00"


def run_git(cwd: Path, *args: str, date: str | None = None) -> str:
    """Run a git command in the given directory and return its stdout.

    Global and system configuration are disabled and identities and dates
    are fixed, so every repository built this way is reproducible. ``date``
    replaces both the author and the committer date.
    """
    env = {
        **os.environ,
        "GIT_CONFIG_NOSYSTEM": "1",
        "GIT_CONFIG_GLOBAL": os.devnull,
        "HOME": str(cwd),
        "GIT_AUTHOR_NAME": "Test Author",
        "GIT_AUTHOR_EMAIL": "author@example.com",
        "GIT_AUTHOR_DATE": date or AUTHOR_DATE,
        "GIT_COMMITTER_NAME": "Test Committer",
        "GIT_COMMITTER_EMAIL": "committer@example.com",
        "GIT_COMMITTER_DATE": date or COMMITTER_DATE,
    }
    result = subprocess.run(  # noqa: S603 - Safe: running git with controlled args
        ["git", *args],  # noqa: S607
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )
    if result.returncode != 0:
        msg = f"git {' '.join(args)} failed: {result.stderr}"
        raise RuntimeError(msg)
    return result.stdout


@dataclass(frozen=True, slots=True)
class GitRepo:
    """A repository on disk built with the git command line."""

    root: Path

    def git(self, *args: str, date: str | None = None) -> str:
        return run_git(self.root, *args, date=date)

    def write(self, path: str, content: str = "content\n") -> Path:
        file_path = self.root / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        _ = file_path.write_text(content)
        return file_path

    def commit(
        self, message: str = "commit", *paths: str, date: str | None = None
    ) -> str:
        """Stage the given paths (everything when empty) and commit them."""
        _ = self.git("add", *(paths or ("--all",)))
        _ = self.git(
            "commit", "--no-gpg-sign", "--allow-empty", "-m", message, date=date
        )
        return self.head()

    def head(self) -> str:
        return self.git("rev-parse", "HEAD").strip()


@pytest.fixture
def git_available() -> None:
    if shutil.which("git") is None:
        pytest.skip("git executable not available")


@pytest.fixture
def git_repo(tmp_path: Path, git_available: None) -> GitRepo:
    """Create an empty repository whose HEAD points at ``main``.

    Structure:
        tmp_path/
            repo/
                .git/    # no commits, no branches
    """
    root = tmp_path / "repo"
    root.mkdir()
    _ = run_git(root, "init", "--quiet")
    _ = run_git(root, "symbolic-ref", "HEAD", "refs/heads/main")
    return GitRepo(root=root)


@pytest.fixture
def committed_repo(git_repo: GitRepo) -> GitRepo:
    """Create a repository with a single committed README on ``main``."""
    _ = git_repo.write("README.md", "# Test Repository\n")
    _ = git_repo.commit("Initial commit")
    return git_repo


@pytest.fixture
def bare_repo(committed_repo: GitRepo, tmp_path: Path) -> GitRepo:
    """Create a bare clone of ``committed_repo``."""
    bare_root = tmp_path / "bare.git"
    _ = run_git(
        tmp_path, "clone", "--quiet", "--bare", str(committed_repo.root), str(bare_root)
    )
    return GitRepo(root=bare_root)


@pytest.fixture
def console() -> Console:
    return Console(
        width=200,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
        record=True,
    )
