"""Remote reader.

Reads ``[remote "<name>"]`` sections from the repository configuration.
URLs are never contacted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gitfacts.exceptions import RemoteNotFoundError
from gitfacts.repository._models import RemoteRecord

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from gitfacts.repository._protocol import RepositoryHandle

_REMOTE_SECTION: Final = "remote"


def _remote_sections(handle: RepositoryHandle) -> dict[str, tuple[str, ...]]:
    """Map remote names to their configuration section as spelled in the file.

    Section names are case-insensitive, subsection (remote) names are not.
    """
    sections: dict[str, tuple[str, ...]] = {}
    for section in handle.config_sections():
        if len(section) == 2 and section[0].lower() == _REMOTE_SECTION:
            _ = sections.setdefault(section[1], section)
    return sections


def _read_urls(
    handle: RepositoryHandle, section: tuple[str, ...] | None
) -> tuple[str, ...]:
    if section is None:
        return ()
    return tuple(handle.config_values(section, "url"))


def read_remotes(
    handle: RepositoryHandle,
    *,
    logger: FilteringBoundLogger | None = None,
) -> dict[str, RemoteRecord]:
    """Read every configured remote.

    Remotes without any ``url`` are skipped, so every record has at least
    one URL.

    Args:
        handle: Open repository.
        logger: Optional logger for skipped remotes.

    Returns:
        Records keyed by remote name, in name order. Empty when no remote is
        configured.
    """
    remotes: dict[str, RemoteRecord] = {}
    sections = _remote_sections(handle)
    for name in sorted(sections):
        urls = _read_urls(handle, sections[name])
        if not urls:
            if logger is not None:
                logger.warning("skipped remote without url", remote=name)
            continue
        remotes[name] = RemoteRecord(name=name, urls=urls)
    return remotes


def read_remote(handle: RepositoryHandle, name: str) -> RemoteRecord:
    """Read a single remote.

    Raises:
        RemoteNotFoundError: If no remote with that name has a URL configured.
    """
    urls = _read_urls(handle, _remote_sections(handle).get(name))
    if not urls:
        raise RemoteNotFoundError(name, directory=handle.path)
    return RemoteRecord(name=name, urls=urls)
