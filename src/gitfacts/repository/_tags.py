"""Tag reader."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from gitfacts.enums import TagKind
from gitfacts.exceptions import InternalResolutionError, TagNotFoundError
from gitfacts.repository._branches import resolve_sha1
from gitfacts.repository._models import TagRecord

if TYPE_CHECKING:
    from gitfacts.repository._protocol import RepositoryHandle

TAGS_NAMESPACE: Final = "refs/tags/"


def _build_record(handle: RepositoryHandle, name: str) -> TagRecord:
    ref = f"{TAGS_NAMESPACE}{name}"
    sha1 = resolve_sha1(handle, ref)
    try:
        tag_object = handle.read_tag_object(sha1)
    except KeyError as e:
        raise InternalResolutionError(ref, reason="tag object not found") from e

    if tag_object is None:
        return TagRecord(name=name, sha1=sha1, kind=TagKind.LIGHTWEIGHT)
    return TagRecord(
        name=name, sha1=sha1, kind=TagKind.ANNOTATED, message=tag_object.message
    )


def read_tag(handle: RepositoryHandle, name: str) -> TagRecord:
    """Read a single tag.

    Raises:
        TagNotFoundError: If no tag with that name exists.
        InternalResolutionError: If the tag exists but cannot be resolved.
    """
    if name not in handle.list_refs(TAGS_NAMESPACE):
        raise TagNotFoundError(name, directory=handle.path)
    return _build_record(handle, name)


def read_tags(
    handle: RepositoryHandle,
    *,
    annotated: bool = True,
    lightweight: bool = True,
) -> list[TagRecord]:
    """Read every tag, filtered by kind.

    Args:
        handle: Open repository.
        annotated: Include annotated tags.
        lightweight: Include lightweight tags.

    Returns:
        Tag records sorted by name.
    """
    wanted = {
        kind
        for kind, include in (
            (TagKind.ANNOTATED, annotated),
            (TagKind.LIGHTWEIGHT, lightweight),
        )
        if include
    }
    names = sorted(handle.list_refs(TAGS_NAMESPACE))
    records = (_build_record(handle, name) for name in names)
    return [record for record in records if record.kind in wanted]
