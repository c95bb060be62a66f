# pyright: reportAttributeAccessIssue=false, reportUnknownMemberType=false
"""Unit tests for logging utilities."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from gitfacts.utils import (
    DEBUG_ENV_VAR,
    create_cli_logger,
    create_logger,
    create_null_logger,
)
from gitfacts.utils._logging import _log_level_from_string


@pytest.fixture(autouse=True)
def no_debug_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)


def _lines(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text().splitlines()]


class TestLogLevelFromString:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("chatty", logging.INFO),
        ],
    )
    def test_maps_names(self, name: str, expected: int) -> None:
        assert _log_level_from_string(name) == expected

    def test_debug_env_overrides_when_respected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(DEBUG_ENV_VAR, "1")

        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG
        assert _log_level_from_string("error") == logging.ERROR


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, tmp_path: Path) -> None:
        log_path = tmp_path / "logs" / "gitfacts.log"

        _ = create_logger(log_path)

        assert log_path.parent.is_dir()

    def test_json_format(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitfacts.log"
        logger = create_logger(log_path)

        logger.info("read branches", directory="/repo", count=2)

        (entry,) = _lines(log_path)
        assert entry["event"] == "read branches"
        assert entry["level"] == "info"
        assert entry["count"] == 2
        assert "timestamp" in entry

    def test_text_format(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitfacts.log"
        logger = create_logger(log_path, log_format="text")

        logger.info("read branches", directory="/repo")

        content = log_path.read_text()
        assert "read branches" in content
        assert "directory=/repo" in content

    def test_filters_below_level(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitfacts.log"
        logger = create_logger(log_path, level="warning")

        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("shown")

        assert [entry["event"] for entry in _lines(log_path)] == ["shown"]

    def test_debug_env_enables_debug(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(DEBUG_ENV_VAR, "1")
        log_path = tmp_path / "gitfacts.log"
        logger = create_logger(log_path, level="error")

        logger.debug("opened repository")

        assert [entry["event"] for entry in _lines(log_path)] == ["opened repository"]

    def test_without_file_logs_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = create_logger()

        logger.warning("skipped remote without url", remote="broken")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "skipped remote without url" in captured.err

    def test_rotation_uses_stdlib_handler(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitfacts.log"

        logger = create_logger(log_path, max_bytes=1000, backup_count=2)
        logger.info("rotating")

        stdlib_logger = logger._logger
        assert isinstance(stdlib_logger, logging.Logger)
        (handler,) = stdlib_logger.handlers
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1000
        assert handler.backupCount == 2
        handler.close()
        assert "rotating" in log_path.read_text()

    def test_rotation_requires_both_params(self, tmp_path: Path) -> None:
        logger = create_logger(tmp_path / "gitfacts.log", max_bytes=1000)

        assert not isinstance(logger._logger, logging.Logger)


class TestCreateNullLogger:
    def test_discards_everything(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = create_null_logger()

        logger.error("not shown")
        logger.debug("not shown")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestCreateCliLogger:
    def test_binds_command(self, tmp_path: Path) -> None:
        log_path = tmp_path / "cli.log"
        logger = create_cli_logger(log_file=str(log_path), command="branches")

        logger.info("read branches")

        (entry,) = _lines(log_path)
        assert entry["command"] == "branches"

    def test_empty_file_logs_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = create_cli_logger(level="debug")

        logger.debug("opened repository")

        assert "opened repository" in capsys.readouterr().err
