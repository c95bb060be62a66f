"""gitfacts exceptions.

Every failure that crosses from the readers into the data source layer is one
of the classified errors below. Library-specific exceptions are caught at the
reader boundary and re-raised as one of these, chained with ``from``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from pathlib import Path


class GitFactsError(Exception):
    """Base exception for gitfacts errors.

    Attributes:
        summary: Short classification shown as the diagnostic title.
        detail: Human-readable explanation of what failed.
    """

    summary: ClassVar[str] = "gitfacts error"

    def __init__(self, detail: str) -> None:
        """Initialize with a human-readable detail message.

        Args:
            detail: Explanation of the failure, including its cause.
        """
        super().__init__(detail)
        self.detail: str = detail


# =============================================================================
# Repository Exceptions
# =============================================================================


class RepositoryNotFoundError(GitFactsError):
    """Raised when a directory does not hold an openable git repository.

    Covers missing paths, plain directories, permission denial and corrupted
    repository metadata alike.

    Attributes:
        directory: The directory that was requested.
    """

    summary: ClassVar[str] = "Cannot open repository"

    def __init__(self, directory: str | Path, *, reason: str = "") -> None:
        """Initialize with the requested directory and the underlying reason.

        Args:
            directory: The directory that could not be opened.
            reason: Description of the underlying failure.
        """
        detail = f"Could not open git repository [{directory}]"
        if reason:
            detail = f"{detail} because of: {reason}"
        super().__init__(detail)
        self.directory: str = str(directory)


class RepositoryReadError(GitFactsError):
    """Raised when an opened repository cannot be read.

    Attributes:
        directory: The repository directory.
    """

    summary: ClassVar[str] = "Cannot read repository"

    def __init__(self, directory: str | Path, *, what: str, reason: str) -> None:
        """Initialize with the repository, the failed read and its reason.

        Args:
            directory: The repository directory.
            what: Which part of the repository was being read.
            reason: Description of the underlying failure.
        """
        super().__init__(
            f"Could not read {what} of [{directory}] because of: {reason}"
        )
        self.directory: str = str(directory)


class InternalResolutionError(GitFactsError):
    """Raised when an existing reference cannot be resolved to an object.

    This is a defect in the repository (dangling or corrupt ref), not a
    missing-name condition, and is never reported as not-found.

    Attributes:
        ref: Full name of the reference that could not be resolved.
    """

    summary: ClassVar[str] = "Cannot resolve reference"

    def __init__(self, ref: str, *, reason: str) -> None:
        """Initialize with the unresolvable reference.

        Args:
            ref: Full reference name, e.g. ``refs/heads/main``.
            reason: Description of the underlying failure.
        """
        super().__init__(f"Could not resolve [{ref}] because of: {reason}")
        self.ref: str = ref


# =============================================================================
# Lookup Exceptions
# =============================================================================


class LookupFailedError(GitFactsError):
    """Base exception for named lookups that found nothing.

    Attributes:
        name: The name that was looked up.
        directory: The repository directory.
    """

    kind: ClassVar[str] = "object"

    def __init__(self, name: str, *, directory: str | Path) -> None:
        """Initialize with the requested name and repository.

        Args:
            name: The requested name.
            directory: The repository directory.
        """
        super().__init__(
            f"Could not read {self.kind} [{name}] of [{directory}] "
            f"because of: {self.kind} not found"
        )
        self.name: str = name
        self.directory: str = str(directory)


class BranchNotFoundError(LookupFailedError):
    """Raised when no branch with the requested name exists."""

    summary: ClassVar[str] = "Cannot read branch"
    kind: ClassVar[str] = "branch"


class RemoteNotFoundError(LookupFailedError):
    """Raised when no remote with the requested name is configured."""

    summary: ClassVar[str] = "Cannot read remote"
    kind: ClassVar[str] = "remote"


class TagNotFoundError(LookupFailedError):
    """Raised when no tag with the requested name exists."""

    summary: ClassVar[str] = "Cannot read tag"
    kind: ClassVar[str] = "tag"


class CommitNotFoundError(LookupFailedError):
    """Raised when the requested id does not name a commit."""

    summary: ClassVar[str] = "Cannot read commit"
    kind: ClassVar[str] = "commit"


class RevisionNotFoundError(LookupFailedError):
    """Raised when a revision names no branch, tag, ref or commit."""

    summary: ClassVar[str] = "Cannot resolve revision"
    kind: ClassVar[str] = "revision"


# =============================================================================
# Argument Exceptions
# =============================================================================


class InvalidArgumentError(GitFactsError):
    """Raised when a read is requested with an unusable argument.

    Attributes:
        argument: Name of the offending argument.
    """

    summary: ClassVar[str] = "Invalid argument"

    def __init__(self, argument: str, *, reason: str) -> None:
        """Initialize with the argument name and what is wrong with it."""
        super().__init__(f"Could not use [{argument}] because of: {reason}")
        self.argument: str = argument


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitFactsError):
    """Base exception for configuration errors."""

    summary: ClassVar[str] = "Invalid configuration"


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column
