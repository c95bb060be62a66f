"""Configuration source discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gitfacts.config._defaults import DEFAULT_CONFIG
from gitfacts.config._models import ConfigSource, ConfigSourceName
from gitfacts.utils import get_user_config_path

if TYPE_CHECKING:
    from pathlib import Path


def _file_exists(path: Path) -> bool:
    """Check if a file exists, treating permission errors as absence."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    *,
    config_path: Path | None = None,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Args:
        config_path: Explicit configuration file. Must exist when given.
        include_env: Include environment variables as a source.
        cli_overrides: Values given on the command line.

    Returns:
        Sources in precedence order (highest first). File sources that do
        not exist are included with ``exists=False``.

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist.
    """
    sources: list[ConfigSource] = []

    if cli_overrides:
        sources.append(
            ConfigSource(name=ConfigSourceName.CLI, exists=True, values=cli_overrides)
        )

    if include_env:
        # Values are parsed during loading
        sources.append(ConfigSource(name=ConfigSourceName.ENV, exists=True))

    if config_path is not None:
        if not _file_exists(config_path):
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)
        sources.append(
            ConfigSource(name=ConfigSourceName.FILE, path=config_path, exists=True)
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
        )
    )

    sources.append(
        ConfigSource(name=ConfigSourceName.DEFAULT, exists=True, values=DEFAULT_CONFIG)
    )
    return sources
