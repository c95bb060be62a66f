from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from gitfacts.cli import create_app
from gitfacts.datasources import GitDataSources


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def sources() -> GitDataSources:
    """Data sources backed by dulwich."""
    return GitDataSources()


@pytest.fixture
def gitfacts_cli(console: Console) -> Callable[..., int]:
    """Create the CLI and return a runner that reports the exit code.

    Arguments go through the meta app so global options are parsed.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
