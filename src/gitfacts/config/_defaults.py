"""Default configuration values.

Built-in defaults used when no other configuration source provides a value.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "output": {
        "format": "json",
        "indent": True,
    },
}
