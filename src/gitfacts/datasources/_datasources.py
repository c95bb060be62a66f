"""Data sources.

``GitDataSources`` is the single entry point for callers. Every method opens
the repository once, runs one or more readers against the handle, and turns
the records into a state model. The handle is closed before the method
returns, also on error.

Errors raised by the readers are already classified and pass through as is.
Anything else raised while reading an opened repository is wrapped into
``RepositoryReadError`` so that no library exception reaches the caller.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from gitfacts.datasources._models import (
    BranchEntry,
    BranchesState,
    BranchState,
    CommitState,
    ConfigState,
    FileStatusEntry,
    LogState,
    RemoteEntry,
    RemotesState,
    RemoteState,
    RepositoryState,
    SignatureState,
    StatusesState,
    StatusState,
    TagEntry,
    TagsState,
    TagState,
)
from gitfacts.enums import LogOrder
from gitfacts.exceptions import RepositoryReadError
from gitfacts.repository import (
    DulwichBackend,
    open_repository,
    read_branch,
    read_branches,
    read_commit,
    read_file_status,
    read_head,
    read_identity,
    read_log,
    read_remote,
    read_remotes,
    read_status,
    read_tag,
    read_tags,
)
from gitfacts.utils import create_null_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from datetime import datetime
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from gitfacts.repository import GitBackend, RepositoryHandle, Signature


def _signature_state(signature: Signature) -> SignatureState:
    return SignatureState(
        name=signature.name,
        email=signature.email,
        timestamp=signature.timestamp,
    )


class GitDataSources:
    """Read-only git data sources.

    Example:
        >>> sources = GitDataSources()
        >>> state = sources.branches("/path/to/repo")
        >>> state.branches["main"].sha1
        '0123456789abcdef0123456789abcdef01234567'
    """

    __slots__ = ("_backend", "_logger")

    def __init__(
        self,
        backend: GitBackend | None = None,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the data sources.

        Args:
            backend: Backend that opens repositories. Defaults to dulwich.
            logger: Logger for trace events. Defaults to a logger that
                discards everything.
        """
        self._backend: GitBackend = backend if backend is not None else DulwichBackend()
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else create_null_logger()
        )

    @contextmanager
    def _reading(self, directory: str | Path, what: str) -> Iterator[RepositoryHandle]:
        with open_repository(self._backend, directory, logger=self._logger) as handle:
            try:
                yield handle
            except (OSError, KeyError, ValueError) as e:
                self._logger.debug(
                    "cannot read repository", directory=str(directory), what=what
                )
                raise RepositoryReadError(directory, what=what, reason=str(e)) from e

    # =========================================================================
    # Branches
    # =========================================================================

    def branch(self, directory: str | Path, name: str) -> BranchState:
        """Read a single branch.

        Raises:
            RepositoryNotFoundError: If the directory cannot be opened.
            BranchNotFoundError: If the branch does not exist.
            InternalResolutionError: If the branch target cannot be resolved.
        """
        with self._reading(directory, "branch") as handle:
            record = read_branch(handle, name)
        self._logger.debug("read branch", directory=str(directory), branch=name)
        return BranchState(
            id=record.name,
            directory=str(directory),
            name=record.name,
            remote=record.remote,
            rebase=record.rebase,
            sha1=record.head_sha1,
        )

    def branches(self, directory: str | Path) -> BranchesState:
        """Read every local branch, keyed and ordered by name."""
        with self._reading(directory, "branches") as handle:
            records = read_branches(handle)
        self._logger.debug(
            "read branches", directory=str(directory), count=len(records)
        )
        return BranchesState(
            id=str(directory),
            directory=str(directory),
            branches={
                record.name: BranchEntry(
                    remote=record.remote,
                    rebase=record.rebase,
                    sha1=record.head_sha1,
                )
                for record in sorted(records, key=lambda r: r.name)
            },
        )

    # =========================================================================
    # Remotes
    # =========================================================================

    def remote(self, directory: str | Path, name: str) -> RemoteState:
        """Read a single remote.

        Raises:
            RepositoryNotFoundError: If the directory cannot be opened.
            RemoteNotFoundError: If the remote is not configured.
        """
        with self._reading(directory, "remote") as handle:
            record = read_remote(handle, name)
        self._logger.debug("read remote", directory=str(directory), remote=name)
        return RemoteState(
            id=record.name,
            directory=str(directory),
            name=record.name,
            urls=list(record.urls),
        )

    def remotes(self, directory: str | Path) -> RemotesState:
        """Read every configured remote, keyed and ordered by name."""
        with self._reading(directory, "remotes") as handle:
            records = read_remotes(handle, logger=self._logger)
        self._logger.debug("read remotes", directory=str(directory), count=len(records))
        return RemotesState(
            id=str(directory),
            directory=str(directory),
            remotes={
                name: RemoteEntry(urls=list(records[name].urls))
                for name in sorted(records)
            },
        )

    # =========================================================================
    # Status
    # =========================================================================

    def status(self, directory: str | Path, file: str) -> StatusState:
        """Read the status of a single path.

        Both states are None for a bare repository.
        """
        with self._reading(directory, "status") as handle:
            record = read_file_status(handle, file)
        self._logger.debug("read status", directory=str(directory), file=file)
        return StatusState(
            id=file,
            directory=str(directory),
            file=file,
            staging=record.staged_state if record is not None else None,
            worktree=record.worktree_state if record is not None else None,
        )

    def statuses(
        self, directory: str | Path, *, include_ignored: bool = False
    ) -> StatusesState:
        """Read the working tree status, keyed and ordered by path."""
        with self._reading(directory, "worktree") as handle:
            snapshot = read_status(handle, include_ignored=include_ignored)
        self._logger.debug(
            "read status",
            directory=str(directory),
            clean=snapshot.is_clean,
            count=len(snapshot.files),
        )
        return StatusesState(
            id=str(directory),
            directory=str(directory),
            is_clean=snapshot.is_clean,
            files={
                path: FileStatusEntry(
                    staging=snapshot.files[path].staged_state,
                    worktree=snapshot.files[path].worktree_state,
                )
                for path in sorted(snapshot.files)
            },
        )

    # =========================================================================
    # Tags
    # =========================================================================

    def tag(self, directory: str | Path, name: str) -> TagState:
        """Read a single tag.

        Raises:
            RepositoryNotFoundError: If the directory cannot be opened.
            TagNotFoundError: If the tag does not exist.
        """
        with self._reading(directory, "tag") as handle:
            record = read_tag(handle, name)
        self._logger.debug("read tag", directory=str(directory), tag=name)
        return TagState(
            id=record.name,
            directory=str(directory),
            name=record.name,
            sha1=record.sha1,
            annotated=record.annotated,
            lightweight=record.lightweight,
            message=record.message,
        )

    def tags(
        self,
        directory: str | Path,
        *,
        annotated: bool = True,
        lightweight: bool = True,
    ) -> TagsState:
        """Read tags of the requested kinds, keyed and ordered by name."""
        with self._reading(directory, "tags") as handle:
            records = read_tags(handle, annotated=annotated, lightweight=lightweight)
        self._logger.debug("read tags", directory=str(directory), count=len(records))
        return TagsState(
            id=str(directory),
            directory=str(directory),
            annotated=annotated,
            lightweight=lightweight,
            tags={
                record.name: TagEntry(
                    sha1=record.sha1,
                    annotated=record.annotated,
                    lightweight=record.lightweight,
                )
                for record in sorted(records, key=lambda r: r.name)
            },
        )

    # =========================================================================
    # Commits and HEAD
    # =========================================================================

    def commit(self, directory: str | Path, sha1: str) -> CommitState:
        """Read a commit by its full hex id.

        Raises:
            RepositoryNotFoundError: If the directory cannot be opened.
            CommitNotFoundError: If the id does not name a commit.
        """
        with self._reading(directory, "commit") as handle:
            record = read_commit(handle, sha1)
        self._logger.debug("read commit", directory=str(directory), sha1=sha1)
        return CommitState(
            id=sha1,
            directory=str(directory),
            sha1=record.sha1,
            tree_sha1=record.tree_sha1,
            message=record.message,
            signature=record.signature,
            author=_signature_state(record.author),
            committer=_signature_state(record.committer),
        )

    def repository(self, directory: str | Path) -> RepositoryState:
        """Read the current branch and the id HEAD resolves to."""
        with self._reading(directory, "HEAD") as handle:
            record = read_head(handle)
        self._logger.debug(
            "read repository", directory=str(directory), branch=record.branch
        )
        return RepositoryState(
            id=str(directory),
            directory=str(directory),
            branch=record.branch,
            sha1=record.sha1,
        )

    # =========================================================================
    # Identity configuration and log
    # =========================================================================

    def config(self, directory: str | Path) -> ConfigState:
        """Read the identity settings of the repository-local configuration."""
        with self._reading(directory, "config") as handle:
            record = read_identity(handle)
        self._logger.debug("read config", directory=str(directory), scope="local")
        return ConfigState(
            id=str(directory),
            directory=str(directory),
            user_name=record.user_name,
            user_email=record.user_email,
            author_name=record.author_name,
            author_email=record.author_email,
            committer_name=record.committer_name,
            committer_email=record.committer_email,
        )

    def log(  # noqa: PLR0913
        self,
        directory: str | Path,
        *,
        start: str | None = None,
        all_refs: bool = False,
        order: LogOrder = LogOrder.TIME,
        since: datetime | None = None,
        until: datetime | None = None,
        max_count: int | None = None,
        skip: int = 0,
        paths: Sequence[str] = (),
    ) -> LogState:
        """List the ids of commits reachable from a revision.

        See ``read_log`` for the meaning of each argument.

        Raises:
            RepositoryNotFoundError: If the directory cannot be opened.
            RevisionNotFoundError: If ``start`` names no commit.
            InvalidArgumentError: If a count is negative or a time bound has
                no UTC offset.
        """
        with self._reading(directory, "log") as handle:
            commits = read_log(
                handle,
                start=start,
                all_refs=all_refs,
                order=order,
                since=since,
                until=until,
                max_count=max_count,
                skip=skip,
                paths=paths,
            )
        self._logger.debug(
            "read log",
            directory=str(directory),
            start=start,
            all_refs=all_refs,
            order=str(order),
            count=len(commits),
        )
        return LogState(
            id=str(directory),
            directory=str(directory),
            from_=start,
            all=all_refs,
            order=order,
            since=since,
            until=until,
            max_count=max_count,
            skip=skip,
            filter_paths=list(paths),
            commits=commits,
        )
