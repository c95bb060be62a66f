"""gitfacts CLI commands."""
# pyright: reportUnusedCallResult=false

from __future__ import annotations

from typing import TYPE_CHECKING

from ._branches import branch, branches
from ._commits import commit, repository
from ._config import config
from ._context import CLIContext
from ._log import log
from ._remotes import remote, remotes
from ._shared import (
    ExitCode,
    FormattableData,
    exit_code_for,
    exit_with_error,
    exit_with_gitfacts_error,
    format_json,
    format_yaml,
    get_error_console,
    print_state,
)
from ._status import status, statuses
from ._tags import tag, tags

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "exit_code_for",
    "exit_with_error",
    "exit_with_gitfacts_error",
    "format_json",
    "format_yaml",
    "get_error_console",
    "print_state",
    "register_commands",
]


def register_commands(app: App) -> None:
    app.command(branch, name="branch")
    app.command(branches, name="branches")
    app.command(remote, name="remote")
    app.command(remotes, name="remotes")
    app.command(status, name="status")
    app.command(statuses, name="statuses")
    app.command(tag, name="tag")
    app.command(tags, name="tags")
    app.command(commit, name="commit")
    app.command(repository, name="repository")
    app.command(config, name="config")
    app.command(log, name="log")
