# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

This module provides the Config container and its typed sections. Values
that fail to parse fall back to the section default instead of failing the
whole load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from gitfacts.config._defaults import DEFAULT_CONFIG
from gitfacts.config._loader import deep_merge, parse_env_vars, read_toml_file

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Self

E = TypeVar("E", bound=StrEnum)


class LogLevel(StrEnum):
    """Log level threshold values."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class OutputFormat(StrEnum):
    """Format data source states are printed in."""

    JSON = "json"
    YAML = "yaml"


class ConfigSourceName(StrEnum):
    """Configuration source names, highest precedence first."""

    CLI = "cli"
    ENV = "env"
    FILE = "file"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """A configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for non-file sources.
        exists: Whether the source exists.
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None = None
    exists: bool = False
    values: dict[str, Any] = field(default_factory=dict)


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class OutputConfig(BaseModel):
    """Output configuration section.

    Attributes:
        format: Format states are printed in.
        indent: Whether JSON output is indented.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    format: OutputFormat = OutputFormat.JSON
    indent: bool = True


def _parse_enum(enum_type: type[E], value: object, default: E) -> E:
    try:
        return enum_type(str(value).lower())
    except ValueError:
        return default


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=_parse_enum(LogLevel, data.get("level", "info"), LogLevel.INFO),
        format=_parse_enum(LogFormat, data.get("format", "json"), LogFormat.JSON),
        file=str(data.get("file", "")),
    )


def _parse_output(data: dict[str, Any]) -> OutputConfig:
    indent = data.get("indent", True)
    return OutputConfig(
        format=_parse_enum(OutputFormat, data.get("format", "json"), OutputFormat.JSON),
        indent=indent if isinstance(indent, bool) else True,
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor.

    Example:
        >>> config = Config.load()
        >>> config.output.format
        <OutputFormat.JSON: 'json'>
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _output: OutputConfig = PrivateAttr(default_factory=OutputConfig)

    def __init__(
        self,
        *,
        _sources: tuple[ConfigSource, ...] = (),
        _logging: LoggingConfig | None = None,
        _output: OutputConfig | None = None,
    ) -> None:
        super().__init__()
        self._sources = _sources
        self._logging = _logging if _logging is not None else LoggingConfig()
        self._output = _output if _output is not None else OutputConfig()

    @classmethod
    def _from_merged(
        cls, merged: dict[str, Any], sources: tuple[ConfigSource, ...]
    ) -> Self:
        return cls(
            _sources=sources,
            _logging=_parse_logging(merged.get("logging", {})),
            _output=_parse_output(merged.get("output", {})),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults."""
        return cls._from_merged(deep_merge(DEFAULT_CONFIG, data), ())

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.FILE, path=path, exists=True, values=data
        )
        return cls._from_merged(deep_merge(DEFAULT_CONFIG, data), (source,))

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order
        (defaults -> user -> file -> env -> cli).

        Args:
            config_path: Explicit configuration file (``--config``).
            include_env: Include ``GITFACTS_<SECTION>__<KEY>`` variables.
            cli_overrides: Values given on the command line.

        Raises:
            ConfigLoadError: If a config file cannot be parsed.
        """
        # Deferred import to avoid circular dependency
        from gitfacts.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            config_path=config_path,
            include_env=include_env,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded: list[ConfigSource] = []
        for source in reversed(sources):
            values = source.values
            if source.name is ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path is not None and source.exists:
                values = read_toml_file(source.path)

            loaded.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        return cls._from_merged(merged, tuple(reversed(loaded)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed, highest precedence first."""
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @property
    def output(self) -> OutputConfig:
        """Return the output configuration section."""
        return self._output
