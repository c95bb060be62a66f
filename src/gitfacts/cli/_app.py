"""The command-line interface for gitfacts."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gitfacts.config import OutputFormat, safe_load_config
from gitfacts.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "Read branches, remotes, status, tags and commits of git repositories."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the CLI application.

    Global options are parsed by the meta app, so invoke it through
    ``app.meta(tokens)``.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gitfacts",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable debug logging")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        format: Annotated[  # noqa: A002
            OutputFormat | None,
            Parameter(name="--format", help="Output format"),
        ] = None,
    ) -> None:
        """Launch gitfacts with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable debug logging.
            config: Explicit path to config file.
            format: Output format, overriding configuration.
        """
        cli_overrides: dict[str, object] | None = None
        if verbose or format is not None:
            cli_overrides = {}
            if verbose:
                cli_overrides["logging"] = {"level": "debug"}
            if format is not None:
                cli_overrides["output"] = {"format": format.value}

        loaded_config, config_error = safe_load_config(
            config_path=config,
            cli_overrides=cli_overrides,
        )

        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
        )

        CLIContext.set_current(
            CLIContext(
                config=loaded_config,
                verbose=verbose,
                config_error=config_error,
                logger=cli_logger,
            )
        )
        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `gitfacts` CLI."""
    app = create_app()
    app.meta()
