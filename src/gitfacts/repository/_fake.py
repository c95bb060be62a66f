# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fake backend for testing.

This module provides an in-memory implementation of the ``GitBackend`` and
``RepositoryHandle`` protocols so the readers can be tested without an actual
git repository on disk.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from gitfacts.exceptions import RepositoryNotFoundError
from gitfacts.repository._protocol import (
    IndexEntrySnapshot,
    RawCommit,
    RawTag,
    TreeEntrySnapshot,
    WorktreeDiff,
)


@dataclass(slots=True)
class FakeRepositoryHandle:
    """Fake repository holding every snapshot in memory.

    References map full names to hex ids. A reference mapped to None exists
    but is dangling, so resolving it raises ``KeyError`` the same way a
    broken ref does on disk. Paths changed by a commit are looked up in
    ``changes``; a commit without an entry changes nothing.

    Example:
        >>> handle = FakeRepositoryHandle()
        >>> handle.refs["refs/heads/main"] = "a" * 40
        >>> handle.config[("branch", "main")] = {"remote": ["origin"]}
        >>> handle.list_refs("refs/heads/")
        ['main']
    """

    path: Path = field(default_factory=lambda: Path("/fake/repo"))
    is_bare: bool = False
    refs: dict[str, str | None] = field(default_factory=dict)
    head: str | None = "refs/heads/main"
    detached_sha: str | None = None
    config: dict[tuple[str, ...], dict[str, list[str]]] = field(default_factory=dict)
    head_tree: dict[str, TreeEntrySnapshot] = field(default_factory=dict)
    index: dict[str, IndexEntrySnapshot] = field(default_factory=dict)
    worktree: WorktreeDiff = field(default_factory=WorktreeDiff)
    ignored: frozenset[str] = field(default_factory=frozenset)
    commits: dict[str, RawCommit] = field(default_factory=dict)
    tags: dict[str, RawTag] = field(default_factory=dict)
    changes: dict[str, frozenset[str]] = field(default_factory=dict)
    closed: bool = False

    def close(self) -> None:
        """Mark the handle closed."""
        self.closed = True

    def list_refs(self, namespace: str) -> list[str]:
        return [
            ref.removeprefix(namespace)
            for ref in self.refs
            if ref.startswith(namespace)
        ]

    def resolve_ref(self, ref: str) -> str:
        sha = self.refs[ref]
        if sha is None:
            raise KeyError(ref)
        return sha

    def read_head(self) -> tuple[str | None, str | None]:
        if self.head is None:
            return None, self.detached_sha
        return self.head, self.refs.get(self.head)

    def config_sections(self) -> list[tuple[str, ...]]:
        return list(self.config)

    def config_values(self, section: tuple[str, ...], key: str) -> list[str]:
        return list(self.config.get(section, {}).get(key, []))

    def read_head_tree(self) -> Mapping[str, TreeEntrySnapshot]:
        return dict(self.head_tree)

    def read_index(self) -> Mapping[str, IndexEntrySnapshot]:
        return dict(self.index)

    def diff_worktree(self, *, include_ignored: bool = False) -> WorktreeDiff:
        """Return the configured diff, with ignored paths only on request."""
        return WorktreeDiff(
            modified=self.worktree.modified,
            deleted=self.worktree.deleted,
            untracked=self.worktree.untracked,
            ignored=self.ignored if include_ignored else frozenset(),
        )

    def read_commit(self, sha: str) -> RawCommit:
        return self.commits[sha]

    def read_tag_object(self, sha: str) -> RawTag | None:
        if sha in self.tags:
            return self.tags[sha]
        if sha in self.commits or sha in self.refs.values():
            return None
        raise KeyError(sha)

    def changed_paths(self, sha: str) -> frozenset[str]:
        _ = self.commits[sha]
        return self.changes.get(sha, frozenset())


@dataclass(slots=True)
class FakeBackend:
    """Fake backend that opens handles from a directory mapping.

    Attributes:
        repositories: Handles keyed by the directory they are opened from.
        open_error: Exception raised by every ``open`` call when set.
        opened: Directories opened so far, in call order.
    """

    repositories: dict[Path, FakeRepositoryHandle] = field(default_factory=dict)
    open_error: Exception | None = None
    opened: list[Path] = field(default_factory=list)

    def add(self, handle: FakeRepositoryHandle) -> FakeRepositoryHandle:
        """Register a handle under its own path and return it."""
        self.repositories[handle.path] = handle
        return handle

    def open(self, directory: Path) -> FakeRepositoryHandle:
        self.opened.append(directory)
        if self.open_error is not None:
            raise self.open_error
        try:
            handle = self.repositories[directory]
        except KeyError:
            raise RepositoryNotFoundError(
                directory, reason="repository does not exist"
            ) from None
        handle.closed = False
        return handle
