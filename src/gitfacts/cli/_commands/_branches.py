# pyright: reportUnusedCallResult=false
"""Branch commands."""

from typing import Annotated

from cyclopts import Parameter

from gitfacts.exceptions import GitFactsError

from ._shared import exit_with_gitfacts_error, get_datasources, print_state


def branch(
    directory: Annotated[str, Parameter(help="Repository directory")],
    name: Annotated[str, Parameter(help="Branch name without refs/heads/")],
) -> None:
    """Show a single local branch and its tracking configuration."""
    try:
        state = get_datasources().branch(directory, name)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)


def branches(
    directory: Annotated[str, Parameter(help="Repository directory")],
) -> None:
    """Show every local branch, ordered by name."""
    try:
        state = get_datasources().branches(directory)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)
