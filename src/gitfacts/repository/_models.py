# ruff: noqa: TC003  # datetime needed at runtime for dataclass fields
"""Repository records.

This module defines the immutable value snapshots produced by the readers.
Optional fields are None when absent, never an empty string.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from gitfacts.enums import FileState, TagKind


@dataclass(frozen=True, slots=True)
class BranchRecord:
    """A local branch and its tracking configuration.

    Attributes:
        name: Branch name without the ``refs/heads/`` prefix.
        head_sha1: 40-character hex id of the commit the branch points at.
        remote: Configured ``branch.<name>.remote``, None if not configured.
        rebase: Configured ``branch.<name>.rebase``, None if not configured.
    """

    name: str
    head_sha1: str
    remote: str | None = None
    rebase: str | None = None


@dataclass(frozen=True, slots=True)
class RemoteRecord:
    """A configured remote.

    Attributes:
        name: Remote name.
        urls: Configured URLs in configuration order; never empty.
    """

    name: str
    urls: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class FileStatusRecord:
    """Status of a single path.

    Attributes:
        path: Repository-relative, ``/``-separated path.
        staged_state: State of the index relative to HEAD.
        worktree_state: State of the file on disk relative to the index.
    """

    path: str
    staged_state: FileState
    worktree_state: FileState


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """Working tree status of a repository.

    Attributes:
        files: Records keyed by path, in path order. Empty iff clean.
    """

    files: Mapping[str, FileStatusRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def is_clean(self) -> bool:
        """Whether no path has a staged or worktree change."""
        return not self.files


@dataclass(frozen=True, slots=True)
class TagRecord:
    """A tag reference.

    Attributes:
        name: Tag name without the ``refs/tags/`` prefix.
        sha1: Id the ref points at (the tag object for annotated tags).
        kind: Whether the tag is annotated or lightweight.
        message: Tag message for annotated tags, None for lightweight tags.
    """

    name: str
    sha1: str
    kind: TagKind
    message: str | None = None

    @property
    def annotated(self) -> bool:
        return self.kind is TagKind.ANNOTATED

    @property
    def lightweight(self) -> bool:
        return self.kind is TagKind.LIGHTWEIGHT


@dataclass(frozen=True, slots=True)
class Signature:
    """Author or committer of a commit.

    Attributes:
        name: Name part of the identity line.
        email: Email part of the identity line, empty if none was recorded.
        timestamp: Time of the signature in its recorded offset.
    """

    name: str
    email: str
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A commit.

    Attributes:
        sha1: 40-character hex commit id.
        tree_sha1: Id of the commit's root tree.
        message: Full commit message.
        author: Author signature.
        committer: Committer signature.
        signature: ASCII-armored PGP signature, None for unsigned commits.
    """

    sha1: str
    tree_sha1: str
    message: str
    author: Signature
    committer: Signature
    signature: str | None = None


@dataclass(frozen=True, slots=True)
class HeadRecord:
    """Where HEAD points.

    Attributes:
        branch: Current branch name, None if detached or unborn.
        sha1: Id HEAD resolves to, None if the repository has no commits.
    """

    branch: str | None = None
    sha1: str | None = None


@dataclass(frozen=True, slots=True)
class IdentityRecord:
    """Identity settings of the repository-local configuration.

    Each field is None when the key is not set in ``.git/config``.
    """

    user_name: str | None = None
    user_email: str | None = None
    author_name: str | None = None
    author_email: str | None = None
    committer_name: str | None = None
    committer_email: str | None = None
