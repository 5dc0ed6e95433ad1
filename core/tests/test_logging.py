from __future__ import annotations

import logging
from collections.abc import Iterator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from huddle_core.app import configure_file_logging
from huddle_core.config import LoggingConfig


@pytest.fixture
def root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for h in saved_handlers:
        if isinstance(h, RotatingFileHandler):
            root.removeHandler(h)
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)


def _file_handlers(root: logging.Logger) -> list[RotatingFileHandler]:
    return [h for h in root.handlers if isinstance(h, RotatingFileHandler)]


def test_rotating_file_handler_writes_output(tmp_path: Path, root_logger: logging.Logger) -> None:
    log_file = tmp_path / "logs" / "huddle.log"
    configure_file_logging(
        LoggingConfig(level="info", file=str(log_file), max_size_mb=2, backup_count=3)
    )

    (handler,) = _file_handlers(root_logger)
    assert handler.maxBytes == 2 * 1024 * 1024
    assert handler.backupCount == 3
    assert root_logger.level == logging.INFO

    logging.getLogger("huddle_core.test").info("hello from the log file")
    handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "huddle_core.test - INFO - hello from the log file" in text


def test_file_handler_is_not_duplicated(tmp_path: Path, root_logger: logging.Logger) -> None:
    config = LoggingConfig(file=str(tmp_path / "huddle.log"))
    configure_file_logging(config)
    configure_file_logging(config)
    assert len(_file_handlers(root_logger)) == 1


def test_no_file_handler_without_log_file(root_logger: logging.Logger) -> None:
    configure_file_logging(LoggingConfig(level="WARNING"))
    assert _file_handlers(root_logger) == []
    assert root_logger.level == logging.WARNING
