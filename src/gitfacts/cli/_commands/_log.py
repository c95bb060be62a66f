# pyright: reportUnusedCallResult=false
# ruff: noqa: FBT002, PLR0913
"""Commit log command."""

from datetime import datetime
from typing import Annotated

from cyclopts import Parameter

from gitfacts.enums import LogOrder
from gitfacts.exceptions import GitFactsError, InvalidArgumentError

from ._shared import exit_with_gitfacts_error, get_datasources, print_state


def parse_timestamp(argument: str, value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp such as ``2024-05-01T12:00:00Z``.

    Raises:
        InvalidArgumentError: If the value is not an ISO 8601 timestamp.
    """
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise InvalidArgumentError(argument, reason=str(e)) from e


def log(
    directory: Annotated[str, Parameter(help="Repository directory")],
    start: Annotated[
        str | None,
        Parameter(name="--from", help="Revision to start from, HEAD by default"),
    ] = None,
    all_refs: Annotated[
        bool,
        Parameter(name="--all", help="Start from HEAD and every ref; ignores --from"),
    ] = False,
    order: Annotated[
        LogOrder,
        Parameter(name="--order", help="Traversal order"),
    ] = LogOrder.TIME,
    since: Annotated[
        str | None,
        Parameter(name="--since", help="Only commits at or after this time"),
    ] = None,
    until: Annotated[
        str | None,
        Parameter(name="--until", help="Only commits at or before this time"),
    ] = None,
    max_count: Annotated[
        int | None,
        Parameter(name="--max-count", help="Limit the number of commits"),
    ] = None,
    skip: Annotated[
        int,
        Parameter(name="--skip", help="Skip this many matching commits"),
    ] = 0,
    paths: Annotated[
        list[str] | None,
        Parameter(name="--path", help="Only commits changing a matching path"),
    ] = None,
) -> None:
    """List the ids of commits reachable from a revision."""
    try:
        state = get_datasources().log(
            directory,
            start=start,
            all_refs=all_refs,
            order=order,
            since=parse_timestamp("since", since),
            until=parse_timestamp("until", until),
            max_count=max_count,
            skip=skip,
            paths=paths or (),
        )
    except GitFactsError as e:
        exit_with_gitfacts_error(e)
    print_state(state)
