"""Branch reader.

Reads local branches, their head commits and their tracking configuration
(``branch.<name>.remote`` and ``branch.<name>.rebase``).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from gitfacts.exceptions import BranchNotFoundError, InternalResolutionError
from gitfacts.repository._models import BranchRecord

if TYPE_CHECKING:
    from gitfacts.repository._protocol import RepositoryHandle

HEADS_NAMESPACE: Final = "refs/heads/"

_SHA1_PATTERN: Final = re.compile(r"[0-9a-f]{40}")


def last_config_value(
    handle: RepositoryHandle, section: tuple[str, ...], key: str
) -> str | None:
    """Read the effective value of a single-valued configuration key.

    Git lets a later assignment override an earlier one, so the last value
    wins. An empty configured value is returned as ``""``.

    Returns:
        The value, or None when the key is not set.
    """
    values = handle.config_values(section, key)
    if not values:
        return None
    return values[-1]


def resolve_sha1(handle: RepositoryHandle, ref: str) -> str:
    """Resolve a reference that is known to exist to a 40-character hex id.

    Raises:
        InternalResolutionError: If the reference cannot be resolved.
    """
    try:
        sha = handle.resolve_ref(ref)
    except KeyError as e:
        raise InternalResolutionError(ref, reason="target not found") from e

    sha = sha.lower()
    if _SHA1_PATTERN.fullmatch(sha) is None:
        raise InternalResolutionError(ref, reason=f"invalid object id {sha!r}")
    return sha


def _build_record(handle: RepositoryHandle, name: str) -> BranchRecord:
    section = ("branch", name)
    return BranchRecord(
        name=name,
        head_sha1=resolve_sha1(handle, f"{HEADS_NAMESPACE}{name}"),
        remote=last_config_value(handle, section, "remote"),
        rebase=last_config_value(handle, section, "rebase"),
    )


def read_branch(handle: RepositoryHandle, name: str) -> BranchRecord:
    """Read a single branch.

    Args:
        handle: Open repository.
        name: Branch name without the ``refs/heads/`` prefix.

    Returns:
        The branch record.

    Raises:
        BranchNotFoundError: If no branch with that name exists.
        InternalResolutionError: If the branch exists but its target cannot
            be resolved.
    """
    if name not in handle.list_refs(HEADS_NAMESPACE):
        raise BranchNotFoundError(name, directory=handle.path)
    return _build_record(handle, name)


def read_branches(handle: RepositoryHandle) -> list[BranchRecord]:
    """Read every local branch.

    Returns:
        Branch records sorted by name (case-sensitive, lexicographic),
        independent of the order refs are stored in. Empty for a repository
        without branches.

    Raises:
        InternalResolutionError: If any branch cannot be resolved.
    """
    return [
        _build_record(handle, name)
        for name in sorted(handle.list_refs(HEADS_NAMESPACE))
    ]
