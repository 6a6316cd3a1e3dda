"""Tests for logging configuration."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from pathlib import Path

import pytest

from blockfields.logging_config import (
    JSONFormatter,
    get_log_level_from_env,
    parse_log_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger's handlers and level back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler_writes_json(self, tmp_path: Path) -> None:
        log_path = tmp_path / "logs" / "app.log"
        setup_logging(level=logging.DEBUG, log_file=log_path)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)
        assert isinstance(handlers[0].formatter, JSONFormatter)

        logging.getLogger("blockfields.test").info("hello test", extra={"form": "hero"})
        handlers[0].flush()
        records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines() if line.strip()]
        record = next(r for r in records if r["message"] == "hello test")
        assert record["level"] == "INFO"
        assert record["form"] == "hero"

    def test_log_file_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        log_path = tmp_path / "env.log"
        monkeypatch.setenv("BLOCKFIELDS_LOG_FILE", str(log_path))
        setup_logging()
        assert Path(logging.getLogger().handlers[0].baseFilename) == log_path

    def test_no_file_gets_null_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a file nothing is written, not even to the terminal."""
        monkeypatch.delenv("BLOCKFIELDS_LOG_FILE", raising=False)
        setup_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)


class TestLevels:
    """Tests for level parsing."""

    @pytest.mark.parametrize(
        "name,level",
        [("debug", logging.DEBUG), ("WARN", logging.WARNING), ("error", logging.ERROR), ("bogus", logging.INFO)],
    )
    def test_parse_log_level(self, name: str, level: int) -> None:
        assert parse_log_level(name) == level

    def test_level_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BLOCKFIELDS_LOG_LEVEL", "DEBUG")
        assert get_log_level_from_env() == logging.DEBUG

    def test_level_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BLOCKFIELDS_LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level_from_env() == logging.ERROR


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_includes_exception(self) -> None:
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.getLogger("x").makeRecord(
                "x", logging.ERROR, __file__, 1, "failed", None, exc_info=sys.exc_info()
            )
        payload = json.loads(JSONFormatter().format(record))
        assert payload["level"] == "ERROR"
        assert payload["message"] == "failed"
        assert "ValueError" in payload["exception"]
        assert "exc_info" not in payload
