# pyright: reportUnusedCallResult=false
# ruff: noqa: FBT002
"""Tag commands."""

from typing import Annotated

from cyclopts import Parameter

from gitfacts.exceptions import GitFactsError

from ._shared import exit_with_gitfacts_error, get_datasources, print_state


def tag(
    directory: Annotated[str, Parameter(help="Repository directory")],
    name: Annotated[str, Parameter(help="Tag name without refs/tags/")],
) -> None:
    """Show a single tag."""
    try:
        state = get_datasources().tag(directory, name)
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)


def tags(
    directory: Annotated[str, Parameter(help="Repository directory")],
    annotated: Annotated[
        bool,
        Parameter(
            name="--annotated",
            negative="--no-annotated",
            help="Include annotated tags",
        ),
    ] = True,
    lightweight: Annotated[
        bool,
        Parameter(
            name="--lightweight",
            negative="--no-lightweight",
            help="Include lightweight tags",
        ),
    ] = True,
) -> None:
    """Show tags of the selected kinds, ordered by name."""
    try:
        state = get_datasources().tags(
            directory, annotated=annotated, lightweight=lightweight
        )
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)
