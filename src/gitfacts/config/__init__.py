"""gitfacts configuration.

Loading and typed access to configuration values.

Example:
    >>> from gitfacts.config import Config
    >>> config = Config.load()
    >>> config.logging.level
    <LogLevel.INFO: 'info'>
"""

from gitfacts.exceptions import ConfigError, ConfigLoadError

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources
from ._load import STRICT_ENV_VAR, safe_load_config
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    OutputConfig,
    OutputFormat,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "STRICT_ENV_VAR",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "OutputConfig",
    "OutputFormat",
    "deep_merge",
    "discover_sources",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
