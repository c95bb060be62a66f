"""Read-only repository access.

This package opens git repositories and reads branches, remotes, working
tree status, tags, commits, commit logs and identity settings from them as
immutable records. The readers depend only on the ``RepositoryHandle``
capability interface; dulwich is hidden behind ``DulwichBackend``.

Classes:
    DulwichBackend: Production backend built on dulwich.
    FakeBackend: In-memory backend for tests.
    RepositoryHandle: Runtime-checkable protocol of an open repository.
    GitBackend: Runtime-checkable protocol of a repository opener.

Example:
    >>> from gitfacts.repository import DulwichBackend, open_repository
    >>> with open_repository(DulwichBackend(), ".", logger=logger) as handle:
    ...     branches = read_branches(handle)
"""

from gitfacts.repository._branches import (
    HEADS_NAMESPACE,
    read_branch,
    read_branches,
)
from gitfacts.repository._commits import parse_signature, read_commit, read_head
from gitfacts.repository._dulwich import DulwichBackend, DulwichRepositoryHandle
from gitfacts.repository._fake import FakeBackend, FakeRepositoryHandle
from gitfacts.repository._identity import read_identity
from gitfacts.repository._log import read_log, resolve_revision
from gitfacts.repository._models import (
    BranchRecord,
    CommitRecord,
    FileStatusRecord,
    HeadRecord,
    IdentityRecord,
    RemoteRecord,
    Signature,
    StatusSnapshot,
    TagRecord,
)
from gitfacts.repository._opener import open_repository
from gitfacts.repository._protocol import (
    GitBackend,
    IndexEntrySnapshot,
    RawCommit,
    RawSignature,
    RawTag,
    RepositoryHandle,
    TreeEntrySnapshot,
    WorktreeDiff,
)
from gitfacts.repository._remotes import read_remote, read_remotes
from gitfacts.repository._status import classify, read_file_status, read_status
from gitfacts.repository._tags import TAGS_NAMESPACE, read_tag, read_tags

__all__ = [
    "HEADS_NAMESPACE",
    "TAGS_NAMESPACE",
    "BranchRecord",
    "CommitRecord",
    "DulwichBackend",
    "DulwichRepositoryHandle",
    "FakeBackend",
    "FakeRepositoryHandle",
    "FileStatusRecord",
    "GitBackend",
    "HeadRecord",
    "IdentityRecord",
    "IndexEntrySnapshot",
    "RawCommit",
    "RawSignature",
    "RawTag",
    "RemoteRecord",
    "RepositoryHandle",
    "Signature",
    "StatusSnapshot",
    "TagRecord",
    "TreeEntrySnapshot",
    "WorktreeDiff",
    "classify",
    "open_repository",
    "parse_signature",
    "read_branch",
    "read_branches",
    "read_commit",
    "read_file_status",
    "read_head",
    "read_identity",
    "read_log",
    "read_remote",
    "read_remotes",
    "read_status",
    "read_tag",
    "read_tags",
    "resolve_revision",
]
