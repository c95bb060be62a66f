"""Identity configuration reader.

Reads the ``user``, ``author`` and ``committer`` name and email settings from
the repository-local configuration. Global and system configuration files
are never consulted, so the result depends on the repository alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitfacts.repository._branches import last_config_value
from gitfacts.repository._models import IdentityRecord

if TYPE_CHECKING:
    from gitfacts.repository._protocol import RepositoryHandle


def read_identity(handle: RepositoryHandle) -> IdentityRecord:
    """Read the identity settings of a repository.

    A key set more than once takes its last value.
    """
    return IdentityRecord(
        user_name=last_config_value(handle, ("user",), "name"),
        user_email=last_config_value(handle, ("user",), "email"),
        author_name=last_config_value(handle, ("author",), "name"),
        author_email=last_config_value(handle, ("author",), "email"),
        committer_name=last_config_value(handle, ("committer",), "name"),
        committer_email=last_config_value(handle, ("committer",), "email"),
    )
