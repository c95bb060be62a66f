"""Tests for the commit log reader."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from gitfacts.enums import LogOrder
from gitfacts.exceptions import InvalidArgumentError, RevisionNotFoundError
from gitfacts.repository import (
    FakeRepositoryHandle,
    RawCommit,
    RawSignature,
    RawTag,
    read_log,
    resolve_revision,
)

# A <- B <- D (main)
#  \       /
#   <- C -'  (side)
SHA_A = "a" * 40
SHA_B = "b" * 40
SHA_C = "c" * 40
SHA_D = "d" * 40
SHA_ORPHAN = "e" * 40
SHA_TAG = "f" * 40
TREE = "0" * 40


def _commit(sha: str, time: int, *parents: str) -> RawCommit:
    return RawCommit(
        sha=sha,
        tree=TREE,
        message="change\n",
        author=RawSignature("Ann <ann@example.com>", time, 0),
        committer=RawSignature("Cid <cid@example.com>", time, 0),
        parents=parents,
    )


def _at(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=UTC)


@pytest.fixture
def history(handle: FakeRepositoryHandle) -> FakeRepositoryHandle:
    """Create a merge history where the side branch is newer than main."""
    for commit in (
        _commit(SHA_A, 100),
        _commit(SHA_B, 200, SHA_A),
        _commit(SHA_C, 300, SHA_A),
        _commit(SHA_D, 400, SHA_B, SHA_C),
    ):
        handle.commits[commit.sha] = commit
    handle.refs["refs/heads/main"] = SHA_D
    handle.refs["refs/heads/side"] = SHA_C
    handle.changes = {
        SHA_A: frozenset({"README.md"}),
        SHA_B: frozenset({"src/app.py"}),
        SHA_C: frozenset({"docs/guide.md"}),
        SHA_D: frozenset({"src/app.py", "docs/guide.md"}),
    }
    return handle


# =============================================================================
# resolve_revision
# =============================================================================


class TestResolveRevision:
    def test_head(self, history: FakeRepositoryHandle) -> None:
        assert resolve_revision(history, "HEAD") == SHA_D

    def test_branch_name(self, history: FakeRepositoryHandle) -> None:
        assert resolve_revision(history, "side") == SHA_C

    def test_full_ref_name(self, history: FakeRepositoryHandle) -> None:
        assert resolve_revision(history, "refs/heads/side") == SHA_C

    def test_full_id_in_any_case(self, history: FakeRepositoryHandle) -> None:
        assert resolve_revision(history, SHA_B.upper()) == SHA_B

    def test_lightweight_tag(self, history: FakeRepositoryHandle) -> None:
        history.refs["refs/tags/v1"] = SHA_B

        assert resolve_revision(history, "v1") == SHA_B

    def test_annotated_tag_is_peeled(self, history: FakeRepositoryHandle) -> None:
        history.tags[SHA_TAG] = RawTag(sha=SHA_TAG, target=SHA_B, message="v2\n")
        history.refs["refs/tags/v2"] = SHA_TAG

        assert resolve_revision(history, "v2") == SHA_B

    def test_remote_tracking_branch(self, history: FakeRepositoryHandle) -> None:
        history.refs["refs/remotes/origin/main"] = SHA_C

        assert resolve_revision(history, "origin/main") == SHA_C

    def test_branch_wins_over_tag(self, history: FakeRepositoryHandle) -> None:
        history.refs["refs/heads/x"] = SHA_C
        history.refs["refs/tags/x"] = SHA_B

        assert resolve_revision(history, "x") == SHA_C

    @pytest.mark.parametrize("revision", ["nope", "refs/heads/nope", "9" * 40])
    def test_unknown_revision_raises(
        self, history: FakeRepositoryHandle, revision: str
    ) -> None:
        with pytest.raises(RevisionNotFoundError) as exc_info:
            _ = resolve_revision(history, revision)

        assert exc_info.value.summary == "Cannot resolve revision"
        assert exc_info.value.name == revision

    def test_unborn_head_raises(self, handle: FakeRepositoryHandle) -> None:
        with pytest.raises(RevisionNotFoundError):
            _ = resolve_revision(handle, "HEAD")


# =============================================================================
# read_log
# =============================================================================


class TestReadLogOrder:
    def test_time_order_is_newest_first(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history) == [SHA_D, SHA_C, SHA_B, SHA_A]

    def test_depth_first_follows_first_parent_first(
        self, history: FakeRepositoryHandle
    ) -> None:
        assert read_log(history, order=LogOrder.DEPTH) == [SHA_D, SHA_B, SHA_A, SHA_C]

    def test_breadth_first(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, order=LogOrder.BREADTH) == [
            SHA_D,
            SHA_B,
            SHA_C,
            SHA_A,
        ]

    def test_shared_ancestor_is_listed_once(
        self, history: FakeRepositoryHandle
    ) -> None:
        for order in LogOrder:
            commits = read_log(history, order=order)

            assert len(commits) == len(set(commits))


class TestReadLogStart:
    def test_from_branch(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, start="side") == [SHA_C, SHA_A]

    def test_from_commit_id(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, start=SHA_B) == [SHA_B, SHA_A]

    def test_unknown_start_raises(self, history: FakeRepositoryHandle) -> None:
        with pytest.raises(RevisionNotFoundError):
            _ = read_log(history, start="missing")

    def test_unborn_head_is_empty(self, handle: FakeRepositoryHandle) -> None:
        assert read_log(handle) == []

    def test_detached_head(self, history: FakeRepositoryHandle) -> None:
        history.head = None
        history.detached_sha = SHA_B

        assert read_log(history) == [SHA_B, SHA_A]

    def test_all_refs_include_unreachable_branches(
        self, history: FakeRepositoryHandle
    ) -> None:
        history.commits[SHA_ORPHAN] = _commit(SHA_ORPHAN, 50)
        history.refs["refs/heads/orphan"] = SHA_ORPHAN

        assert read_log(history, all_refs=True) == [
            SHA_D,
            SHA_C,
            SHA_B,
            SHA_A,
            SHA_ORPHAN,
        ]

    def test_all_refs_ignores_start(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, start="side", all_refs=True) == read_log(
            history, all_refs=True
        )

    def test_all_refs_peel_annotated_tags(
        self, history: FakeRepositoryHandle
    ) -> None:
        history.commits[SHA_ORPHAN] = _commit(SHA_ORPHAN, 50)
        history.tags[SHA_TAG] = RawTag(sha=SHA_TAG, target=SHA_ORPHAN, message="t\n")
        history.refs["refs/tags/old"] = SHA_TAG

        assert read_log(history, all_refs=True)[-1] == SHA_ORPHAN

    def test_missing_parent_ends_the_walk(self, handle: FakeRepositoryHandle) -> None:
        handle.commits[SHA_D] = _commit(SHA_D, 400, SHA_B)
        handle.refs["refs/heads/main"] = SHA_D

        assert read_log(handle) == [SHA_D]


class TestReadLogTimeWindow:
    def test_since_is_inclusive(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, since=_at(200)) == [SHA_D, SHA_C, SHA_B]

    def test_until_is_inclusive(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, until=_at(300)) == [SHA_C, SHA_B, SHA_A]

    def test_since_and_until(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, since=_at(150), until=_at(350)) == [SHA_C, SHA_B]

    def test_offset_does_not_change_the_instant(
        self, history: FakeRepositoryHandle
    ) -> None:
        since = _at(300).astimezone(timezone(timedelta(hours=-5)))

        assert read_log(history, since=since) == [SHA_D, SHA_C]

    def test_naive_time_raises(self, history: FakeRepositoryHandle) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            _ = read_log(history, since=datetime(2024, 1, 1))  # noqa: DTZ001

        assert exc_info.value.argument == "since"


class TestReadLogLimits:
    def test_skip_and_max_count(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, skip=1, max_count=2) == [SHA_C, SHA_B]

    def test_max_count_zero_is_empty(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, max_count=0) == []

    def test_skip_past_the_end_is_empty(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, skip=10) == []

    @pytest.mark.parametrize(
        ("argument", "kwargs"),
        [("max_count", {"max_count": -1}), ("skip", {"skip": -1})],
    )
    def test_negative_counts_raise(
        self,
        history: FakeRepositoryHandle,
        argument: str,
        kwargs: dict[str, int],
    ) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            _ = read_log(history, **kwargs)  # type: ignore[arg-type]

        assert exc_info.value.argument == argument


class TestReadLogPaths:
    def test_directory_pattern(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, paths=["docs/"]) == [SHA_D, SHA_C]

    def test_glob_pattern(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, paths=["*.py"]) == [SHA_D, SHA_B]

    def test_any_pattern_matches(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, paths=["README.md", "docs/"]) == [
            SHA_D,
            SHA_C,
            SHA_A,
        ]

    def test_filters_apply_before_skip(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, paths=["*.py"], skip=1) == [SHA_B]

    def test_no_match_is_empty(self, history: FakeRepositoryHandle) -> None:
        assert read_log(history, paths=["*.rs"]) == []
