"""Repository opener.

Resolves a directory to an open repository handle for the duration of a
single invocation and releases it afterwards, on success and on error.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from gitfacts.exceptions import RepositoryNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.typing import FilteringBoundLogger

    from gitfacts.repository._protocol import GitBackend, RepositoryHandle


@contextmanager
def open_repository(
    backend: GitBackend,
    directory: str | Path,
    *,
    logger: FilteringBoundLogger,
) -> Iterator[RepositoryHandle]:
    """Open a repository and close it when the block exits.

    Args:
        backend: Backend that performs the actual open.
        directory: Repository root directory.
        logger: Logger for trace events.

    Yields:
        The open repository handle.

    Raises:
        RepositoryNotFoundError: If the directory cannot be opened.
    """
    try:
        handle = backend.open(Path(directory))
    except RepositoryNotFoundError:
        logger.debug("cannot open repository", directory=str(directory))
        raise
    except (OSError, ValueError) as e:
        logger.debug("cannot open repository", directory=str(directory))
        raise RepositoryNotFoundError(directory, reason=str(e)) from e

    logger.debug("opened repository", directory=str(directory), bare=handle.is_bare)
    try:
        yield handle
    finally:
        handle.close()
        logger.debug("closed repository", directory=str(directory))
