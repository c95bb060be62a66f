"""Normalized data sources over git repositories.

Classes:
    GitDataSources: Entry point with one method per data source.

Models:
    BranchState, BranchesState: Single branch and all branches.
    RemoteState, RemotesState: Single remote and all remotes.
    StatusState, StatusesState: Single path status and working tree status.
    TagState, TagsState: Single tag and filtered tags.
    CommitState: A commit with author and committer.
    RepositoryState: Current branch and HEAD id.
    ConfigState: Identity settings of the local configuration.
    LogState: Commit ids of a log walk.
"""

from gitfacts.datasources._datasources import GitDataSources
from gitfacts.datasources._models import (
    BranchEntry,
    BranchesState,
    BranchState,
    CommitState,
    ConfigState,
    DataSourceState,
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

__all__ = [
    "BranchEntry",
    "BranchState",
    "BranchesState",
    "CommitState",
    "ConfigState",
    "DataSourceState",
    "FileStatusEntry",
    "GitDataSources",
    "LogState",
    "RemoteEntry",
    "RemoteState",
    "RemotesState",
    "RepositoryState",
    "SignatureState",
    "StatusState",
    "StatusesState",
    "TagEntry",
    "TagState",
    "TagsState",
]
