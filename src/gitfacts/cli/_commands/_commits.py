# pyright: reportUnusedCallResult=false
"""Commit and HEAD commands."""

from typing import Annotated

from cyclopts import Parameter

from gitfacts.exceptions import GitFactsError

from ._shared import exit_with_gitfacts_error, get_datasources, print_state


def commit(
    directory: Annotated[str, Parameter(help="Repository directory")],
    sha1: Annotated[str, Parameter(help="Full 40-character commit id")],
) -> None:
    """Show a commit with its author, committer and signature."""
    try:
        state = get_datasources().commit(directory, sha1)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)


def repository(
    directory: Annotated[str, Parameter(help="Repository directory")],
) -> None:
    """Show the current branch and the commit HEAD resolves to."""
    try:
        state = get_datasources().repository(directory)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)
