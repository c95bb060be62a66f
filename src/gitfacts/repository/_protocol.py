# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Capability interface over the underlying git-access library.

The readers depend only on the protocols in this module, never on a concrete
library. ``DulwichBackend`` is the production implementation and
``FakeBackend`` an in-memory one for tests. Everything that crosses this
interface is a plain value: strings, ints and the frozen snapshot dataclasses
below.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class TreeEntrySnapshot:
    """A blob recorded in the HEAD tree.

    Attributes:
        sha: Hex object id of the blob.
        mode: Git file mode.
    """

    sha: str
    mode: int


@dataclass(frozen=True, slots=True)
class IndexEntrySnapshot:
    """A path recorded in the index.

    Attributes:
        sha: Hex object id of the staged blob, None for conflicted entries.
        mode: Git file mode, None for conflicted entries.
        conflicted: True when the index holds unmerged stages for the path.
    """

    sha: str | None
    mode: int | None
    conflicted: bool = False


@dataclass(frozen=True, slots=True)
class WorktreeDiff:
    """Differences between the index and the files on disk.

    All paths are repository-relative, ``/``-separated strings.

    Attributes:
        modified: Indexed paths whose content or mode differs on disk.
        deleted: Indexed paths that no longer exist on disk.
        untracked: Paths on disk that are not in the index and not ignored.
        ignored: Paths on disk matched by ignore rules (only when requested).
    """

    modified: frozenset[str] = field(default_factory=frozenset)
    deleted: frozenset[str] = field(default_factory=frozenset)
    untracked: frozenset[str] = field(default_factory=frozenset)
    ignored: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class RawSignature:
    """Identity line and time of a commit author or committer.

    Attributes:
        identity: The ``Name <email>`` line as recorded.
        timestamp: Seconds since the epoch.
        offset: Offset from UTC in seconds, positive east of UTC.
    """

    identity: str
    timestamp: int
    offset: int


@dataclass(frozen=True, slots=True)
class RawCommit:
    """Commit object contents.

    Attributes:
        parents: Hex ids of the parent commits, first parent first.
    """

    sha: str
    tree: str
    message: str
    author: RawSignature
    committer: RawSignature
    gpgsig: str | None = None
    parents: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RawTag:
    """Annotated tag object contents."""

    sha: str
    target: str
    message: str


@runtime_checkable
class RepositoryHandle(Protocol):
    """An open repository, scoped to a single invocation.

    Implementations raise ``KeyError`` for names or objects that cannot be
    found and ``OSError`` for filesystem failures; the readers classify both.
    """

    @property
    def path(self) -> Path:
        """Directory the repository was opened from."""
        ...

    @property
    def is_bare(self) -> bool:
        """Whether the repository has no working tree."""
        ...

    def close(self) -> None:
        """Release file handles held by the repository."""
        ...

    def list_refs(self, namespace: str) -> list[str]:
        """List reference names under a namespace.

        Args:
            namespace: Namespace prefix ending in ``/``, e.g. ``refs/heads/``.

        Returns:
            Names with the namespace prefix stripped, in no particular order.
        """
        ...

    def resolve_ref(self, ref: str) -> str:
        """Resolve a full reference name to a hex object id.

        Raises:
            KeyError: If the reference is missing, dangling, loops, or
                points at an object absent from the object store.
        """
        ...

    def read_head(self) -> tuple[str | None, str | None]:
        """Read HEAD.

        Returns:
            Tuple of (full ref name HEAD points at or None if detached,
            resolved hex id or None if HEAD is unborn).
        """
        ...

    def config_sections(self) -> list[tuple[str, ...]]:
        """List repository configuration sections in file order."""
        ...

    def config_values(self, section: tuple[str, ...], key: str) -> list[str]:
        """Read every value of a configuration key, in configured order.

        Returns:
            The values, or an empty list when the key is not set.
        """
        ...

    def read_head_tree(self) -> Mapping[str, TreeEntrySnapshot]:
        """Read the blobs of the HEAD commit's tree.

        Returns:
            Mapping of path to entry; empty when HEAD is unborn.
        """
        ...

    def read_index(self) -> Mapping[str, IndexEntrySnapshot]:
        """Read the index; empty when no index file exists."""
        ...

    def diff_worktree(self, *, include_ignored: bool = False) -> WorktreeDiff:
        """Compare the working tree with the index.

        Untracked directories that hold no tracked file are reported as a
        single path ending in ``/``.
        """
        ...

    def read_commit(self, sha: str) -> RawCommit:
        """Read a commit object.

        Raises:
            KeyError: If the object is missing or is not a commit.
        """
        ...

    def read_tag_object(self, sha: str) -> RawTag | None:
        """Read an annotated tag object.

        Returns:
            The tag, or None when the object exists but is not a tag.

        Raises:
            KeyError: If the object is missing.
        """
        ...

    def changed_paths(self, sha: str) -> frozenset[str]:
        """List the paths a commit changes relative to its first parent.

        Every path of the tree counts as changed for a root commit.

        Raises:
            KeyError: If the object is missing or is not a commit.
        """
        ...


@runtime_checkable
class GitBackend(Protocol):
    """Factory that opens repositories."""

    def open(self, directory: Path) -> RepositoryHandle:
        """Open the repository rooted at a directory.

        Raises:
            RepositoryNotFoundError: If the directory cannot be opened as a
                repository for any reason.
        """
        ...
