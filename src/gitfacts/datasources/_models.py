# ruff: noqa: TC003  # datetime needed at runtime for pydantic fields
"""Data source state models.

Each data source produces one of the frozen models below. Mappings are built
in key order and optional values are None (JSON ``null``), never ``""``
standing in for "absent".
"""

from datetime import datetime
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from gitfacts.enums import FileState, LogOrder


class DataSourceState(BaseModel):
    """Common base of every data source state.

    Attributes:
        id: Stable identity of the result across repeated reads.
        directory: Repository directory that was queried.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    id: str
    directory: str

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Dump the state as JSON-compatible values."""
        return self.model_dump(mode="json")


# =============================================================================
# Branches
# =============================================================================


class BranchEntry(BaseModel):
    """A branch inside the all-branches mapping."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    remote: str | None = None
    rebase: str | None = None
    sha1: str


class BranchState(DataSourceState):
    """A single branch; ``id`` is the branch name."""

    name: str
    remote: str | None = None
    rebase: str | None = None
    sha1: str


class BranchesState(DataSourceState):
    """Every local branch; ``id`` is the directory."""

    branches: dict[str, BranchEntry] = Field(default_factory=dict)


# =============================================================================
# Remotes
# =============================================================================


class RemoteEntry(BaseModel):
    """A remote inside the remotes mapping."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    urls: list[str]


class RemoteState(DataSourceState):
    """A single remote; ``id`` is the remote name."""

    name: str
    urls: list[str]


class RemotesState(DataSourceState):
    """Every configured remote; ``id`` is the directory."""

    remotes: dict[str, RemoteEntry] = Field(default_factory=dict)


# =============================================================================
# Status
# =============================================================================


class FileStatusEntry(BaseModel):
    """A path inside the statuses mapping."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    staging: FileState
    worktree: FileState


class StatusState(DataSourceState):
    """Status of a single path; ``id`` is the path.

    ``staging`` and ``worktree`` are None for a bare repository.
    """

    file: str
    staging: FileState | None = None
    worktree: FileState | None = None


class StatusesState(DataSourceState):
    """Working tree status; ``id`` is the directory.

    ``is_clean`` is true exactly when ``files`` is empty.
    """

    is_clean: bool
    files: dict[str, FileStatusEntry] = Field(default_factory=dict)


# =============================================================================
# Tags
# =============================================================================


class TagEntry(BaseModel):
    """A tag inside the tags mapping."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    sha1: str
    annotated: bool
    lightweight: bool


class TagState(DataSourceState):
    """A single tag; ``id`` is the tag name."""

    name: str
    sha1: str
    annotated: bool
    lightweight: bool
    message: str | None = None


class TagsState(DataSourceState):
    """Tags filtered by kind; ``id`` is the directory."""

    annotated: bool = True
    lightweight: bool = True
    tags: dict[str, TagEntry] = Field(default_factory=dict)


# =============================================================================
# Commits and HEAD
# =============================================================================


class SignatureState(BaseModel):
    """Author or committer of a commit."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    name: str
    email: str
    timestamp: datetime


class CommitState(DataSourceState):
    """A commit; ``id`` is the requested id."""

    sha1: str
    tree_sha1: str
    message: str
    signature: str | None = None
    author: SignatureState
    committer: SignatureState


class RepositoryState(DataSourceState):
    """Where HEAD points; ``id`` is the directory."""

    branch: str | None = None
    sha1: str | None = None


# =============================================================================
# Identity configuration
# =============================================================================


class ConfigState(DataSourceState):
    """Identity settings of the local configuration; ``id`` is the directory.

    Every setting is None when the key is not set.
    """

    scope: Literal["local"] = "local"
    user_name: str | None = None
    user_email: str | None = None
    author_name: str | None = None
    author_email: str | None = None
    committer_name: str | None = None
    committer_email: str | None = None


# =============================================================================
# Log
# =============================================================================


class LogState(DataSourceState):
    """Commit ids of a log walk; ``id`` is the directory.

    The query arguments are echoed back next to ``commits``. ``from_`` is
    dumped as ``from``.
    """

    from_: str | None = Field(default=None, serialization_alias="from")
    all: bool = False
    order: LogOrder = LogOrder.TIME
    since: datetime | None = None
    until: datetime | None = None
    max_count: int | None = None
    skip: int = 0
    filter_paths: list[str] = Field(default_factory=list)
    commits: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return self.model_dump(mode="json", by_alias=True)
