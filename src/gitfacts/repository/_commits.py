"""Commit and HEAD readers."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING, Final

from gitfacts.exceptions import CommitNotFoundError
from gitfacts.repository._branches import HEADS_NAMESPACE
from gitfacts.repository._models import CommitRecord, HeadRecord, Signature

if TYPE_CHECKING:
    from gitfacts.repository._protocol import RawSignature, RepositoryHandle

_SHA1_PATTERN: Final = re.compile(r"[0-9a-fA-F]{40}")


def parse_signature(raw: RawSignature) -> Signature:
    """Split an identity line into name and email and attach its time.

    Args:
        raw: The recorded identity line, timestamp and UTC offset.

    Returns:
        The parsed signature; the email is empty when the line has none.
    """
    identity = raw.identity
    if "<" in identity and identity.endswith(">"):
        name, _, email = identity.rpartition("<")
        name = name.strip()
        email = email.rstrip(">")
    else:
        name = identity.strip()
        email = ""

    tz = UTC if raw.offset == 0 else timezone(timedelta(seconds=raw.offset))
    return Signature(
        name=name,
        email=email,
        timestamp=datetime.fromtimestamp(raw.timestamp, tz=tz),
    )


def read_commit(handle: RepositoryHandle, sha1: str) -> CommitRecord:
    """Read a commit by its full hex id.

    Raises:
        CommitNotFoundError: If the id is malformed or does not name a commit.
    """
    if _SHA1_PATTERN.fullmatch(sha1) is None:
        raise CommitNotFoundError(sha1, directory=handle.path)
    try:
        raw = handle.read_commit(sha1.lower())
    except KeyError as e:
        raise CommitNotFoundError(sha1, directory=handle.path) from e

    return CommitRecord(
        sha1=raw.sha,
        tree_sha1=raw.tree,
        message=raw.message,
        author=parse_signature(raw.author),
        committer=parse_signature(raw.committer),
        signature=raw.gpgsig,
    )


def read_head(handle: RepositoryHandle) -> HeadRecord:
    """Read which branch HEAD is on and what it resolves to.

    Returns:
        Both fields None for an unborn HEAD; ``branch`` None when detached.
    """
    try:
        target, sha1 = handle.read_head()
    except KeyError:
        return HeadRecord()
    if sha1 is None:
        return HeadRecord()

    branch = None
    if target is not None and target.startswith(HEADS_NAMESPACE):
        branch = target.removeprefix(HEADS_NAMESPACE)
    return HeadRecord(branch=branch, sha1=sha1)
