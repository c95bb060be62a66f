# pyright: reportUnusedCallResult=false
"""Identity configuration command."""

from typing import Annotated

from cyclopts import Parameter

from gitfacts.exceptions import GitFactsError

from ._shared import exit_with_gitfacts_error, get_datasources, print_state


def config(
    directory: Annotated[str, Parameter(help="Repository directory")],
) -> None:
    """Show user, author and committer settings of the local configuration."""
    try:
        state = get_datasources().config(directory)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)
