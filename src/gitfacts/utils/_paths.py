from pathlib import Path

import platformdirs


def get_user_config_dir() -> Path:
    """Get the platform-specific gitfacts configuration directory."""
    return platformdirs.user_config_path("gitfacts")


def get_user_config_path() -> Path:
    r"""Get the platform-specific user config file path.

    - Linux: ``~/.config/gitfacts/config.toml`` (honours ``XDG_CONFIG_HOME``)
    - macOS: ``~/Library/Application Support/gitfacts/config.toml``
    - Windows: ``%APPDATA%\gitfacts\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return get_user_config_dir() / "config.toml"
