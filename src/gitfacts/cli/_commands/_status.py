# pyright: reportUnusedCallResult=false
# ruff: noqa: FBT002
"""Working tree status commands."""

from typing import Annotated

from cyclopts import Parameter

from gitfacts.exceptions import GitFactsError

from ._shared import exit_with_gitfacts_error, get_datasources, print_state


def status(
    directory: Annotated[str, Parameter(help="Repository directory")],
    file: Annotated[str, Parameter(help="Repository-relative path")],
) -> None:
    """Show the staged and worktree state of a single path."""
    try:
        state = get_datasources().status(directory, file)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)


def statuses(
    directory: Annotated[str, Parameter(help="Repository directory")],
    ignored: Annotated[
        bool,
        Parameter(name="--ignored", help="Also report ignored files"),
    ] = False,
) -> None:
    """Show every changed path and whether the working tree is clean."""
    try:
        state = get_datasources().statuses(directory, include_ignored=ignored)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)
