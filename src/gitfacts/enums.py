"""Enumeration types for gitfacts."""

from enum import StrEnum


class FileState(StrEnum):
    """State of a path on one side of a status comparison.

    The staged side compares HEAD with the index; the worktree side compares
    the index with the files on disk.
    """

    UNMODIFIED = "unmodified"
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UNTRACKED = "untracked"
    IGNORED = "ignored"
    CONFLICTED = "conflicted"


class TagKind(StrEnum):
    """Kind of a tag reference."""

    ANNOTATED = "annotated"
    LIGHTWEIGHT = "lightweight"


class LogOrder(StrEnum):
    """Traversal order of a commit log.

    ``time`` lists commits newest first by committer time, the way
    ``git log`` does. ``depth`` and ``breadth`` walk the parent graph
    depth-first (first parent first) and breadth-first.
    """

    TIME = "time"
    DEPTH = "depth"
    BREADTH = "breadth"
