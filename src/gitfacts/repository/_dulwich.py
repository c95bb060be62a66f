"""Capability implementation backed by dulwich.

This module is the only place that imports dulwich. It translates dulwich's
bytes-oriented API into the plain values of the capability interface and
maps every open failure to ``RepositoryNotFoundError``. Corrupt objects,
refs or index files found after opening surface as ``RepositoryReadError``.
"""

# ruff: noqa: TC003  # Path needed at runtime
import os
import struct
import zlib
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Final

from dulwich.config import ConfigFile
from dulwich.diff_tree import tree_changes
from dulwich.errors import (
    ApplyDeltaError,
    ChecksumMismatch,
    FileFormatException,
    MissingCommitError,
    ObjectMissing,
    WrongObjectException,
)
from dulwich.index import (
    ConflictedIndexEntry,
    Index,
    UnsupportedIndexFormat,
    get_unstaged_changes,
)
from dulwich.object_store import iter_tree_contents
from dulwich.objects import Commit, Tag
from dulwich.porcelain import get_untracked_paths
from dulwich.refs import SymrefLoop
from dulwich.repo import Repo

from gitfacts.exceptions import RepositoryNotFoundError, RepositoryReadError
from gitfacts.repository._protocol import (
    IndexEntrySnapshot,
    RawCommit,
    RawSignature,
    RawTag,
    TreeEntrySnapshot,
    WorktreeDiff,
)

# dulwich reports a malformed index header with AssertionError
_LIBRARY_ERRORS: Final = (
    ApplyDeltaError,
    AssertionError,
    ChecksumMismatch,
    FileFormatException,
    MissingCommitError,
    ObjectMissing,
    UnsupportedIndexFormat,
    WrongObjectException,
    struct.error,
    zlib.error,
)


def decode_bytes(value: bytes | str) -> str:
    """Decode bytes to str if needed.

    Args:
        value: A bytes or str value.

    Returns:
        The value as a string.
    """
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="surrogateescape")
    return value


def _to_tree_path(fs_path: str) -> str:
    """Convert a relative filesystem path to a ``/``-separated repository path.

    A trailing separator, which marks a collapsed directory, is kept.
    """
    return fs_path.replace(os.sep, "/")


def _holds_files(directory: str) -> bool:
    return any(files for _, _, files in os.walk(directory))


class DulwichRepositoryHandle:
    """An open dulwich repository.

    Implements ``RepositoryHandle``. Instances are created by
    ``DulwichBackend.open`` and must be closed by the caller.
    """

    __slots__: Final = ("_path", "_repo")

    def __init__(self, repo: Repo, path: Path) -> None:
        self._repo = repo
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_bare(self) -> bool:
        return bool(self._repo.bare)

    def close(self) -> None:
        self._repo.close()

    @contextmanager
    def _reading(self, what: str, *errors: type[Exception]) -> Iterator[None]:
        """Re-raise dulwich format and corruption errors as read errors.

        Args:
            what: Part of the repository being read, for the error detail.
            errors: Further exception types that mean the part is malformed.
        """
        try:
            yield
        except (*_LIBRARY_ERRORS, *errors) as e:
            reason = str(e) or type(e).__name__
            raise RepositoryReadError(self._path, what=what, reason=reason) from e

    # =========================================================================
    # References
    # =========================================================================

    def list_refs(self, namespace: str) -> list[str]:
        base = namespace.encode()
        with self._reading("references"):
            names = self._repo.refs.keys(base=base)
        return [decode_bytes(name) for name in names]

    def resolve_ref(self, ref: str) -> str:
        with self._reading("references"):
            try:
                sha = self._repo.refs[ref.encode()]
            except SymrefLoop as e:
                raise KeyError(ref) from e
            # A ref naming an object that is not in the store resolves to nothing
            if sha not in self._repo.object_store:
                raise KeyError(ref)
        return decode_bytes(sha)

    def read_head(self) -> tuple[str | None, str | None]:
        with self._reading("HEAD"):
            try:
                chain, sha = self._repo.refs.follow(b"HEAD")
            except SymrefLoop as e:
                raise KeyError("HEAD") from e
        target = decode_bytes(chain[-1]) if len(chain) > 1 else None
        return target, decode_bytes(sha) if sha is not None else None

    # =========================================================================
    # Configuration
    # =========================================================================

    def _read_config(self) -> ConfigFile:
        # Syntax errors in the config file are reported as ValueError
        with self._reading("config", ValueError):
            return self._repo.get_config()

    def config_sections(self) -> list[tuple[str, ...]]:
        config = self._read_config()
        return [tuple(decode_bytes(part) for part in s) for s in config.sections()]

    def config_values(self, section: tuple[str, ...], key: str) -> list[str]:
        config = self._read_config()
        encoded = tuple(part.encode() for part in section)
        try:
            return [
                decode_bytes(value)
                for value in config.get_multivar(encoded, key.encode())
            ]
        except KeyError:
            return []

    # =========================================================================
    # Objects
    # =========================================================================

    def read_head_tree(self) -> Mapping[str, TreeEntrySnapshot]:
        _, head_sha = self.read_head()
        if head_sha is None:
            return {}

        with self._reading("objects"):
            commit = self._repo[head_sha.encode()]
            if not isinstance(commit, Commit):
                raise KeyError(head_sha)

            return {
                decode_bytes(entry.path): TreeEntrySnapshot(
                    sha=decode_bytes(entry.sha), mode=entry.mode
                )
                for entry in iter_tree_contents(self._repo.object_store, commit.tree)
            }

    def read_commit(self, sha: str) -> RawCommit:
        with self._reading("objects"):
            obj = self._repo[sha.encode()]
        if not isinstance(obj, Commit):
            raise KeyError(sha)

        gpgsig = obj.gpgsig
        return RawCommit(
            sha=decode_bytes(obj.id),
            tree=decode_bytes(obj.tree),
            message=decode_bytes(obj.message),
            author=RawSignature(
                identity=decode_bytes(obj.author),
                timestamp=obj.author_time,
                offset=obj.author_timezone,
            ),
            committer=RawSignature(
                identity=decode_bytes(obj.committer),
                timestamp=obj.commit_time,
                offset=obj.commit_timezone,
            ),
            gpgsig=decode_bytes(gpgsig) if gpgsig else None,
            parents=tuple(decode_bytes(parent) for parent in obj.parents),
        )

    def read_tag_object(self, sha: str) -> RawTag | None:
        with self._reading("objects"):
            obj = self._repo[sha.encode()]
        if not isinstance(obj, Tag):
            return None

        _, target = obj.object
        return RawTag(
            sha=decode_bytes(obj.id),
            target=decode_bytes(target),
            message=decode_bytes(obj.message),
        )

    def changed_paths(self, sha: str) -> frozenset[str]:
        paths: set[str] = set()
        with self._reading("objects"):
            commit = self._repo[sha.encode()]
            if not isinstance(commit, Commit):
                raise KeyError(sha)

            parent_tree = None
            # The first parent is absent at the boundary of a shallow clone
            if commit.parents and commit.parents[0] in self._repo.object_store:
                parent = self._repo[commit.parents[0]]
                if isinstance(parent, Commit):
                    parent_tree = parent.tree
            for change in tree_changes(
                self._repo.object_store, parent_tree, commit.tree
            ):
                for entry in (change.old, change.new):
                    if entry is not None and entry.path is not None:
                        paths.add(decode_bytes(entry.path))
        return frozenset(paths)

    # =========================================================================
    # Index and working tree
    # =========================================================================

    def _open_index(self) -> Index:
        """Open the index, or an empty one when no index file exists yet."""
        index_path = self._repo.index_path()
        if not Path(index_path).exists():
            return Index(index_path, read=False)
        return self._repo.open_index()

    def read_index(self) -> Mapping[str, IndexEntrySnapshot]:
        if self._repo.bare:
            return {}

        with self._reading("index"):
            index = self._open_index()
        entries: dict[str, IndexEntrySnapshot] = {}
        for raw_path, entry in index.items():
            path = decode_bytes(raw_path)
            if isinstance(entry, ConflictedIndexEntry):
                entries[path] = IndexEntrySnapshot(sha=None, mode=None, conflicted=True)
            else:
                entries[path] = IndexEntrySnapshot(
                    sha=decode_bytes(entry.sha), mode=entry.mode
                )
        return entries

    def diff_worktree(self, *, include_ignored: bool = False) -> WorktreeDiff:
        """Compare the working tree with the index.

        Untracked directories holding no tracked file are collapsed into a
        single ``dir/`` path, and so are nested repositories, the same way
        ``git status`` lists them. The index stat cache is never refreshed.
        """
        if self._repo.bare:
            return WorktreeDiff()

        root = self._repo.path
        modified: set[str] = set()
        deleted: set[str] = set()
        with self._reading("worktree"):
            index = self._open_index()
            for tree_path in get_unstaged_changes(index, root):
                path = decode_bytes(tree_path)
                if os.path.lexists(os.path.join(root, *path.split("/"))):
                    modified.add(path)
                else:
                    deleted.add(path)

            untracked = frozenset(
                _to_tree_path(p)
                for p in get_untracked_paths(
                    root, root, index, exclude_ignored=True, untracked_files="normal"
                )
            )
            ignored: set[str] = set()
            if include_ignored:
                for p in get_untracked_paths(
                    root, root, index, exclude_ignored=False, untracked_files="normal"
                ):
                    path = _to_tree_path(p)
                    if path in untracked:
                        continue
                    # Empty directories are neither untracked nor ignored
                    if path.endswith("/") and not _holds_files(os.path.join(root, p)):
                        continue
                    ignored.add(path)

        return WorktreeDiff(
            modified=frozenset(modified),
            deleted=frozenset(deleted),
            untracked=untracked,
            ignored=frozenset(ignored),
        )


class DulwichBackend:
    """Opens repositories with dulwich.

    Implements ``GitBackend``.
    """

    def open(self, directory: Path) -> DulwichRepositoryHandle:
        """Open the repository rooted at a directory.

        Args:
            directory: The repository root (work tree root, or the bare
                repository directory).

        Returns:
            An open handle; the caller closes it.

        Raises:
            RepositoryNotFoundError: If the directory cannot be opened.
        """
        try:
            repo = Repo(str(directory))
        except Exception as e:  # noqa: BLE001 - every open failure is "not found"
            reason = str(e) or type(e).__name__
            raise RepositoryNotFoundError(directory, reason=reason) from e
        return DulwichRepositoryHandle(repo, directory)
