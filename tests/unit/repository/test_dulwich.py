"""Tests for the dulwich backend that do not need a repository on disk."""

import zlib
from pathlib import Path

import pytest
from dulwich.errors import ChecksumMismatch, ObjectFormatException
from dulwich.refs import SymrefLoop
from pytest_mock import MockerFixture

from gitfacts.exceptions import RepositoryNotFoundError, RepositoryReadError
from gitfacts.repository import (
    DulwichBackend,
    DulwichRepositoryHandle,
    GitBackend,
    RepositoryHandle,
)
from gitfacts.repository._dulwich import decode_bytes


class TestDecodeBytes:
    def test_decodes_utf8(self) -> None:
        assert decode_bytes("café".encode()) == "café"

    def test_passes_strings_through(self) -> None:
        assert decode_bytes("main") == "main"

    def test_undecodable_bytes_survive(self) -> None:
        raw = b"\xff\xfe"

        assert decode_bytes(raw).encode("utf-8", errors="surrogateescape") == raw


class TestDulwichBackendOpen:
    def test_conforms_to_protocol(self) -> None:
        assert isinstance(DulwichBackend(), GitBackend) is True

    def test_missing_directory_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(RepositoryNotFoundError) as exc_info:
            _ = DulwichBackend().open(tmp_path / "missing")

        assert str(tmp_path / "missing") in exc_info.value.detail

    def test_plain_directory_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(RepositoryNotFoundError):
            _ = DulwichBackend().open(tmp_path)

    def test_permission_error_raises_not_found(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        _ = mocker.patch(
            "gitfacts.repository._dulwich.Repo",
            side_effect=PermissionError("permission denied"),
        )

        with pytest.raises(RepositoryNotFoundError, match="permission denied"):
            _ = DulwichBackend().open(tmp_path)

    def test_open_wraps_repo(self, tmp_path: Path, mocker: MockerFixture) -> None:
        repo = mocker.MagicMock()
        _ = mocker.patch("gitfacts.repository._dulwich.Repo", return_value=repo)

        handle = DulwichBackend().open(tmp_path)

        assert isinstance(handle, RepositoryHandle)
        assert handle.path == tmp_path


class TestDulwichRepositoryHandle:
    def test_symref_loop_resolves_to_key_error(self, mocker: MockerFixture) -> None:
        repo = mocker.MagicMock()
        repo.refs.__getitem__.side_effect = SymrefLoop(b"refs/heads/a", 5)
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        with pytest.raises(KeyError):
            _ = handle.resolve_ref("refs/heads/a")

    def test_object_missing_from_store_resolves_to_key_error(
        self, mocker: MockerFixture
    ) -> None:
        repo = mocker.MagicMock()
        repo.refs.__getitem__.return_value = b"a" * 40
        repo.object_store.__contains__.return_value = False
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        with pytest.raises(KeyError):
            _ = handle.resolve_ref("refs/heads/a")

    def test_missing_config_key_is_empty(self, mocker: MockerFixture) -> None:
        repo = mocker.MagicMock()
        repo.get_config.return_value.get_multivar.side_effect = KeyError(b"remote")
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        assert handle.config_values(("branch", "main"), "remote") == []

    def test_close_closes_repo(self, mocker: MockerFixture) -> None:
        repo = mocker.MagicMock()

        DulwichRepositoryHandle(repo, Path("/repo")).close()

        repo.close.assert_called_once_with()


class TestLibraryErrorsAfterOpen:
    @pytest.mark.parametrize(
        "error",
        [
            ObjectFormatException("invalid object header"),
            zlib.error("Error -3 while decompressing data"),
            ChecksumMismatch(b"a" * 40, b"b" * 40),
        ],
    )
    def test_corrupt_object_raises_read_error(
        self, mocker: MockerFixture, error: Exception
    ) -> None:
        repo = mocker.MagicMock()
        repo.__getitem__.side_effect = error
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        with pytest.raises(RepositoryReadError) as exc_info:
            _ = handle.read_commit("a" * 40)

        assert exc_info.value.__cause__ is error
        assert "Could not read objects of [/repo]" in exc_info.value.detail

    def test_corrupt_tag_object_raises_read_error(
        self, mocker: MockerFixture
    ) -> None:
        repo = mocker.MagicMock()
        repo.__getitem__.side_effect = zlib.error("incorrect header check")
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        with pytest.raises(RepositoryReadError, match="incorrect header check"):
            _ = handle.read_tag_object("a" * 40)

    def test_malformed_index_header_raises_read_error(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        index_file = tmp_path / "index"
        _ = index_file.write_bytes(b"garbage")
        repo = mocker.MagicMock()
        repo.bare = False
        repo.index_path.return_value = str(index_file)
        repo.open_index.side_effect = AssertionError("Invalid index file header")
        handle = DulwichRepositoryHandle(repo, tmp_path)

        with pytest.raises(RepositoryReadError) as exc_info:
            _ = handle.read_index()

        assert "Could not read index" in exc_info.value.detail

    def test_error_without_message_uses_type_name(
        self, mocker: MockerFixture
    ) -> None:
        repo = mocker.MagicMock()
        repo.refs.keys.side_effect = AssertionError()
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        with pytest.raises(RepositoryReadError, match="AssertionError"):
            _ = handle.list_refs("refs/heads/")

    def test_non_commit_object_is_not_a_read_error(
        self, mocker: MockerFixture
    ) -> None:
        repo = mocker.MagicMock()
        repo.__getitem__.return_value = object()
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        with pytest.raises(KeyError):
            _ = handle.read_commit("a" * 40)


class TestOpenIndex:
    def test_missing_index_file_reads_as_empty(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        repo = mocker.MagicMock()
        repo.bare = False
        repo.index_path.return_value = str(tmp_path / "index")
        handle = DulwichRepositoryHandle(repo, tmp_path)

        assert handle.read_index() == {}
        repo.open_index.assert_not_called()


class TestConfigErrors:
    def test_config_syntax_error_raises_read_error(
        self, mocker: MockerFixture
    ) -> None:
        repo = mocker.MagicMock()
        repo.get_config.side_effect = ValueError("expected trailing ]")
        handle = DulwichRepositoryHandle(repo, Path("/repo"))

        with pytest.raises(RepositoryReadError, match="expected trailing"):
            _ = handle.config_sections()
        with pytest.raises(RepositoryReadError):
            _ = handle.config_values(("user",), "name")
