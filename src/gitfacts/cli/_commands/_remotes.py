# pyright: reportUnusedCallResult=false
"""Remote commands."""

from typing import Annotated

from cyclopts import Parameter

from gitfacts.exceptions import GitFactsError

from ._shared import exit_with_gitfacts_error, get_datasources, print_state


def remote(
    directory: Annotated[str, Parameter(help="Repository directory")],
    name: Annotated[str, Parameter(help="Remote name")],
) -> None:
    """Show the URLs of a single remote."""
    try:
        state = get_datasources().remote(directory, name)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)


def remotes(
    directory: Annotated[str, Parameter(help="Repository directory")],
) -> None:
    """Show every configured remote, ordered by name.

    URLs are read from configuration only and never contacted.
    """
    try:
        state = get_datasources().remotes(directory)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)
