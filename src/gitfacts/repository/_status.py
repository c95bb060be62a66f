"""Status reader.

Classifies every path of a repository by comparing three snapshots: the
HEAD tree, the index, and the working tree. The staged state compares HEAD
with the index, the worktree state compares the index with the disk.

All paths are repository-relative strings. An untracked or ignored directory
that holds no tracked file is a single path ending in ``/``. Nothing is
written back to the repository; in particular the index stat cache is never
refreshed.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from gitfacts.enums import FileState
from gitfacts.repository._models import FileStatusRecord, StatusSnapshot

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gitfacts.repository._protocol import (
        IndexEntrySnapshot,
        RepositoryHandle,
        TreeEntrySnapshot,
        WorktreeDiff,
    )


def _staged_state(
    head_entry: TreeEntrySnapshot | None,
    index_entry: IndexEntrySnapshot | None,
) -> FileState:
    if index_entry is None:
        return FileState.UNMODIFIED if head_entry is None else FileState.DELETED
    if head_entry is None:
        return FileState.ADDED
    if head_entry.sha != index_entry.sha or head_entry.mode != index_entry.mode:
        return FileState.MODIFIED
    return FileState.UNMODIFIED


def _worktree_state(path: str, worktree: WorktreeDiff) -> FileState:
    if path in worktree.deleted:
        return FileState.DELETED
    if path in worktree.modified:
        return FileState.MODIFIED
    if path in worktree.untracked:
        return FileState.UNTRACKED
    if path in worktree.ignored:
        return FileState.IGNORED
    return FileState.UNMODIFIED


def _detect_renames(
    records: dict[str, FileStatusRecord],
    head: Mapping[str, TreeEntrySnapshot],
    index: Mapping[str, IndexEntrySnapshot],
) -> None:
    """Fold exact staged renames into a single record at the new path.

    A staged deletion and a staged addition that carry the same blob are a
    rename. Pairs are matched in path order so the result is deterministic.
    """
    deleted_by_sha: dict[str, list[str]] = {}
    for path in sorted(records):
        if records[path].staged_state is FileState.DELETED:
            deleted_by_sha.setdefault(head[path].sha, []).append(path)

    pairs: list[tuple[str, str]] = []
    for path in sorted(records):
        if records[path].staged_state is not FileState.ADDED:
            continue
        candidates = deleted_by_sha.get(index[path].sha or "")
        if candidates:
            pairs.append((candidates.pop(0), path))

    for old_path, new_path in pairs:
        old_record = records[old_path]
        # A file recreated at the old path is untracked (or ignored) again
        if old_record.worktree_state is FileState.UNMODIFIED:
            del records[old_path]
        else:
            records[old_path] = FileStatusRecord(
                path=old_path,
                staged_state=old_record.worktree_state,
                worktree_state=old_record.worktree_state,
            )
        records[new_path] = FileStatusRecord(
            path=new_path,
            staged_state=FileState.RENAMED,
            worktree_state=records[new_path].worktree_state,
        )


def classify(
    head: Mapping[str, TreeEntrySnapshot],
    index: Mapping[str, IndexEntrySnapshot],
    worktree: WorktreeDiff,
) -> StatusSnapshot:
    """Classify paths from raw HEAD, index and worktree snapshots.

    Args:
        head: Blobs of the HEAD tree.
        index: Entries of the index.
        worktree: Differences between the index and the disk.

    Returns:
        Snapshot holding one record per path with at least one non-unmodified
        state, in path order.
    """
    paths = set(head) | set(index) | worktree.untracked | worktree.ignored
    records: dict[str, FileStatusRecord] = {}

    for path in paths:
        index_entry = index.get(path)
        if index_entry is not None and index_entry.conflicted:
            records[path] = FileStatusRecord(
                path=path,
                staged_state=FileState.CONFLICTED,
                worktree_state=FileState.CONFLICTED,
            )
            continue

        worktree_state = _worktree_state(path, worktree)
        if worktree_state in (FileState.UNTRACKED, FileState.IGNORED) and (
            path not in head
        ):
            staged_state = worktree_state
        else:
            staged_state = _staged_state(head.get(path), index_entry)

        if staged_state is FileState.UNMODIFIED and (
            worktree_state is FileState.UNMODIFIED
        ):
            continue
        records[path] = FileStatusRecord(
            path=path, staged_state=staged_state, worktree_state=worktree_state
        )

    _detect_renames(records, head, index)
    return StatusSnapshot(
        files=MappingProxyType({path: records[path] for path in sorted(records)})
    )


def read_status(
    handle: RepositoryHandle, *, include_ignored: bool = False
) -> StatusSnapshot:
    """Read the working tree status of a repository.

    A bare repository has no working tree and is always clean.

    Args:
        handle: Open repository.
        include_ignored: Also report files matched by ignore rules.

    Returns:
        The status snapshot.
    """
    if handle.is_bare:
        return StatusSnapshot()

    head = handle.read_head_tree()
    index = handle.read_index()
    worktree = handle.diff_worktree(include_ignored=include_ignored)
    return classify(head, index, worktree)


def read_file_status(handle: RepositoryHandle, path: str) -> FileStatusRecord | None:
    """Read the status of a single path.

    A tracked path without changes is unmodified on both sides. A path below
    an ignored directory is ignored. Any other path that is neither tracked
    nor listed on its own, including one that does not exist, is reported as
    untracked.

    Returns:
        The record, or None for a bare repository.
    """
    if handle.is_bare:
        return None

    head = handle.read_head_tree()
    index = handle.read_index()
    worktree = handle.diff_worktree(include_ignored=True)
    record = classify(head, index, worktree).files.get(path)
    if record is not None:
        return record

    if path in head or path in index:
        state = FileState.UNMODIFIED
    elif any(
        path.startswith(directory)
        for directory in worktree.ignored
        if directory.endswith("/")
    ):
        state = FileState.IGNORED
    else:
        state = FileState.UNTRACKED
    return FileStatusRecord(path=path, staged_state=state, worktree_state=state)
