"""Commit log reader.

Walks the commit graph from one revision, or from HEAD and every ref, and
lists commit ids. Time and path filters are applied first; ``skip`` and
``max_count`` then cut the filtered sequence, so ``skip=2, max_count=3``
returns the third to fifth matching commit.
"""

from __future__ import annotations

import heapq
import re
from collections import deque
from itertools import count, islice
from typing import TYPE_CHECKING, Final

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from gitfacts.enums import LogOrder
from gitfacts.exceptions import InvalidArgumentError, RevisionNotFoundError
from gitfacts.repository._branches import HEADS_NAMESPACE, resolve_sha1
from gitfacts.repository._tags import TAGS_NAMESPACE

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from datetime import datetime

    from gitfacts.repository._protocol import RawCommit, RepositoryHandle

REFS_NAMESPACE: Final = "refs/"
REMOTES_NAMESPACE: Final = "refs/remotes/"

_HEAD: Final = "HEAD"
_SHA1_PATTERN: Final = re.compile(r"[0-9a-fA-F]{40}")


# =============================================================================
# Revisions
# =============================================================================


def _head_sha(handle: RepositoryHandle) -> str | None:
    try:
        _, sha = handle.read_head()
    except KeyError:
        return None
    return sha


def _peel_to_commit(handle: RepositoryHandle, sha: str) -> str | None:
    """Follow annotated tags to the commit they point at.

    Returns:
        The commit id, or None when the chain ends at a missing object or at
        an object that is not a commit.
    """
    try:
        tag = handle.read_tag_object(sha)
        while tag is not None:
            sha = tag.target
            tag = handle.read_tag_object(sha)
        _ = handle.read_commit(sha)
    except KeyError:
        return None
    return sha


def _lookup(handle: RepositoryHandle, revision: str) -> str | None:
    if revision == _HEAD:
        return _head_sha(handle)
    if _SHA1_PATTERN.fullmatch(revision) is not None:
        return revision.lower()

    if revision.startswith(REFS_NAMESPACE):
        candidates = [revision]
    else:
        candidates = [
            f"{namespace}{revision}"
            for namespace in (HEADS_NAMESPACE, TAGS_NAMESPACE, REMOTES_NAMESPACE)
        ]
    known = set(handle.list_refs(REFS_NAMESPACE))
    for ref in candidates:
        if ref.removeprefix(REFS_NAMESPACE) in known:
            return resolve_sha1(handle, ref)
    return None


def resolve_revision(handle: RepositoryHandle, revision: str) -> str:
    """Resolve a revision to the id of the commit it names.

    Accepted forms are ``HEAD``, a full 40-character id, a full ref name, and
    a short name looked up as a branch, then a tag, then a remote-tracking
    branch. Annotated tags are peeled to their commit.

    Raises:
        RevisionNotFoundError: If nothing matches or the match is not a
            commit.
        InternalResolutionError: If a matching ref cannot be resolved.
    """
    sha = _lookup(handle, revision)
    commit_sha = _peel_to_commit(handle, sha) if sha is not None else None
    if commit_sha is None:
        raise RevisionNotFoundError(revision, directory=handle.path)
    return commit_sha


def _starting_points(
    handle: RepositoryHandle, start: str | None, *, all_refs: bool
) -> list[str]:
    if not all_refs:
        if start is not None:
            return [resolve_revision(handle, start)]
        head = _head_sha(handle)
        head = _peel_to_commit(handle, head) if head is not None else None
        return [head] if head is not None else []

    candidates = [_head_sha(handle)]
    candidates.extend(
        resolve_sha1(handle, f"{REFS_NAMESPACE}{name}")
        for name in sorted(handle.list_refs(REFS_NAMESPACE))
    )
    starts: list[str] = []
    for sha in candidates:
        commit_sha = _peel_to_commit(handle, sha) if sha is not None else None
        # Refs to trees or blobs have no history
        if commit_sha is not None and commit_sha not in starts:
            starts.append(commit_sha)
    return starts


# =============================================================================
# Traversal
# =============================================================================


def _load(handle: RepositoryHandle, sha: str) -> RawCommit | None:
    try:
        return handle.read_commit(sha)
    except KeyError:
        # Parents cut off by a shallow clone are not in the object store
        return None


def _walk_by_time(handle: RepositoryHandle, starts: list[str]) -> Iterator[RawCommit]:
    """Yield commits newest first by committer time, ties in discovery order."""
    heap: list[tuple[int, int, RawCommit]] = []
    seen: set[str] = set()
    sequence = count()

    def push(sha: str) -> None:
        if sha in seen:
            return
        seen.add(sha)
        commit = _load(handle, sha)
        if commit is not None:
            entry = (-commit.committer.timestamp, next(sequence), commit)
            heapq.heappush(heap, entry)

    for sha in starts:
        push(sha)
    while heap:
        _, _, commit = heapq.heappop(heap)
        yield commit
        for parent in commit.parents:
            push(parent)


def _walk_depth_first(
    handle: RepositoryHandle, starts: list[str]
) -> Iterator[RawCommit]:
    """Yield commits in pre-order, following first parents first."""
    stack = list(reversed(starts))
    seen: set[str] = set()
    while stack:
        sha = stack.pop()
        if sha in seen:
            continue
        seen.add(sha)
        commit = _load(handle, sha)
        if commit is None:
            continue
        yield commit
        stack.extend(reversed(commit.parents))


def _walk_breadth_first(
    handle: RepositoryHandle, starts: list[str]
) -> Iterator[RawCommit]:
    queue = deque(starts)
    seen = set(starts)
    while queue:
        commit = _load(handle, queue.popleft())
        if commit is None:
            continue
        yield commit
        for parent in commit.parents:
            if parent not in seen:
                seen.add(parent)
                queue.append(parent)


def _walk(
    handle: RepositoryHandle, starts: list[str], order: LogOrder
) -> Iterator[RawCommit]:
    match order:
        case LogOrder.DEPTH:
            return _walk_depth_first(handle, starts)
        case LogOrder.BREADTH:
            return _walk_breadth_first(handle, starts)
        case _:
            return _walk_by_time(handle, starts)


# =============================================================================
# Log
# =============================================================================


def _timestamp(argument: str, value: datetime | None) -> int | None:
    if value is None:
        return None
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidArgumentError(argument, reason="timestamp has no UTC offset")
    return int(value.timestamp())


def _check_count(argument: str, value: int | None) -> None:
    if value is not None and value < 0:
        raise InvalidArgumentError(argument, reason=f"{value} is negative")


def read_log(  # noqa: PLR0913
    handle: RepositoryHandle,
    *,
    start: str | None = None,
    all_refs: bool = False,
    order: LogOrder = LogOrder.TIME,
    since: datetime | None = None,
    until: datetime | None = None,
    max_count: int | None = None,
    skip: int = 0,
    paths: Sequence[str] = (),
) -> list[str]:
    """List commit ids reachable from a revision.

    Args:
        handle: Open repository.
        start: Revision to start from; HEAD when None. Ignored with
            ``all_refs``.
        all_refs: Start from HEAD and every ref under ``refs/``.
        order: Traversal order.
        since: Keep commits whose committer time is at or after this instant.
        until: Keep commits whose committer time is at or before this instant.
        max_count: Keep at most this many commits; no limit when None.
        skip: Drop this many matching commits first.
        paths: Gitignore-style patterns; keep commits that change a path
            matching any of them.

    Returns:
        Commit ids in traversal order. Empty when HEAD is unborn and no
        start is given.

    Raises:
        InvalidArgumentError: If a count is negative or a time bound has no
            UTC offset.
        RevisionNotFoundError: If ``start`` names no commit.
    """
    _check_count("max_count", max_count)
    _check_count("skip", skip)
    since_ts = _timestamp("since", since)
    until_ts = _timestamp("until", until)
    spec = PathSpec.from_lines(GitWildMatchPattern, paths) if paths else None

    def keep(commit: RawCommit) -> bool:
        timestamp = commit.committer.timestamp
        if since_ts is not None and timestamp < since_ts:
            return False
        if until_ts is not None and timestamp > until_ts:
            return False
        if spec is None:
            return True
        return any(spec.match_file(p) for p in handle.changed_paths(commit.sha))

    starts = _starting_points(handle, start, all_refs=all_refs)
    selected = (commit.sha for commit in _walk(handle, starts, order) if keep(commit))
    stop = None if max_count is None else skip + max_count
    return list(islice(selected, skip, stop))
