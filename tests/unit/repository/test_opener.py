"""Tests for the repository opener."""

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from gitfacts.exceptions import RepositoryNotFoundError
from gitfacts.repository import FakeBackend, FakeRepositoryHandle, open_repository
from gitfacts.utils import create_null_logger


class TestOpenRepository:
    def test_yields_open_handle_and_closes_it(
        self, backend: FakeBackend, handle: FakeRepositoryHandle
    ) -> None:
        with open_repository(
            backend, "/fake/repo", logger=create_null_logger()
        ) as opened:
            assert opened is handle
            assert handle.closed is False

        assert handle.closed is True

    def test_closes_handle_on_error(
        self, backend: FakeBackend, handle: FakeRepositoryHandle
    ) -> None:
        with (
            pytest.raises(RuntimeError),
            open_repository(backend, "/fake/repo", logger=create_null_logger()),
        ):
            raise RuntimeError

        assert handle.closed is True

    def test_accepts_path_objects(self, backend: FakeBackend) -> None:
        with open_repository(backend, Path("/fake/repo"), logger=create_null_logger()):
            pass

        assert backend.opened == [Path("/fake/repo")]

    def test_missing_repository_raises_not_found(self, backend: FakeBackend) -> None:
        with (
            pytest.raises(RepositoryNotFoundError) as exc_info,
            open_repository(backend, "/elsewhere", logger=create_null_logger()),
        ):
            pass

        assert exc_info.value.summary == "Cannot open repository"
        assert exc_info.value.directory == "/elsewhere"

    @pytest.mark.parametrize(
        "error",
        [PermissionError("permission denied"), ValueError("bad format")],
    )
    def test_backend_errors_become_not_found(
        self, backend: FakeBackend, error: Exception
    ) -> None:
        backend.open_error = error

        with (
            pytest.raises(RepositoryNotFoundError) as exc_info,
            open_repository(backend, "/fake/repo", logger=create_null_logger()),
        ):
            pass

        assert exc_info.value.__cause__ is error
        assert str(error) in exc_info.value.detail

    def test_logs_open_and_close(
        self, backend: FakeBackend, mocker: MockerFixture
    ) -> None:
        logger = mocker.MagicMock()

        with open_repository(backend, "/fake/repo", logger=logger):
            pass

        events = [call.args[0] for call in logger.debug.call_args_list]
        assert events == ["opened repository", "closed repository"]
