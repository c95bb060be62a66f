# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Output formatters (JSON, YAML)
- Error reporting for classified gitfacts errors
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any, NoReturn

from gitfacts.config import OutputFormat
from gitfacts.datasources import GitDataSources
from gitfacts.exceptions import (
    GitFactsError,
    InternalResolutionError,
    InvalidArgumentError,
    LookupFailedError,
    RepositoryNotFoundError,
    RepositoryReadError,
)

from ._context import CLIContext

if TYPE_CHECKING:
    from rich.console import Console

    from gitfacts.datasources import DataSourceState

# Type alias for formattable data - uses Any to match library signatures
FormattableData = dict[str, Any]


class ExitCode(IntEnum):
    """Standard exit codes for gitfacts CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Dictionary to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    import orjson

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_yaml(data: FormattableData) -> str:
    """Format data as YAML, keeping key order."""
    import yaml

    return yaml.safe_dump(
        data, default_flow_style=False, allow_unicode=True, sort_keys=False
    )


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> NoReturn:
    """Print an error message and exit with the specified code.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    from rich.markup import escape

    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise SystemExit(code)


def exit_code_for(error: GitFactsError) -> ExitCode:
    """Map a classified error to its exit code."""
    if isinstance(error, (LookupFailedError, RepositoryNotFoundError)):
        return ExitCode.NOT_FOUND
    if isinstance(error, RepositoryReadError):
        return ExitCode.IO_ERROR
    if isinstance(error, InternalResolutionError):
        return ExitCode.INTERNAL_ERROR
    if isinstance(error, InvalidArgumentError):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.LOAD_ERROR


def exit_with_gitfacts_error(error: GitFactsError) -> NoReturn:
    """Report a classified error as ``<summary>: <detail>`` and exit."""
    ctx = CLIContext.get_current()
    if ctx.logger is not None:
        ctx.logger.debug("command failed", summary=error.summary, detail=error.detail)
    exit_with_error(f"{error.summary}: {error.detail}", exit_code_for(error))


def get_datasources() -> GitDataSources:
    """Create data sources that log through the current CLI logger."""
    return GitDataSources(logger=CLIContext.get_current().logger)


def print_state(state: DataSourceState) -> None:
    """Print a data source state in the configured output format."""
    ctx = CLIContext.get_current()
    data = state.to_dict()
    match ctx.output_format:
        case OutputFormat.YAML:
            output = format_yaml(data)
        case _:
            output = format_json(data, indent=ctx.config.output.indent)
    print(output.rstrip())  # noqa: T201
