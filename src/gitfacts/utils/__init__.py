from ._logging import (
    DEBUG_ENV_VAR,
    LogFormatType,
    create_cli_logger,
    create_logger,
    create_null_logger,
)
from ._paths import get_user_config_dir, get_user_config_path

__all__ = [
    "DEBUG_ENV_VAR",
    "LogFormatType",
    "create_cli_logger",
    "create_logger",
    "create_null_logger",
    "get_user_config_dir",
    "get_user_config_path",
]
