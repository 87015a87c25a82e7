"""Tests for get_logger/setup_logging and the root logger setup."""

import logging
from collections.abc import Iterator
from logging.handlers import QueueHandler, RotatingFileHandler
from pathlib import Path

import pytest

from plugin_updater.config import Settings
from plugin_updater.logger import (
    HybridConsoleFormatter,
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    get_state,
    setup_logging,
    update_logger_from_config,
)


@pytest.fixture
def fresh_logger_state() -> Iterator[None]:
    """Reset logger state before and after the test."""
    clear_logger_state()
    yield
    clear_logger_state()


def test_get_logger_returns_child_of_package_root(
    fresh_logger_state: None,
) -> None:
    """Test module loggers hang under the plugin_updater root."""
    logger = get_logger("plugin_updater.core.repository")

    assert logger.name == "plugin_updater.core.repository"
    ancestors = []
    parent = logger.parent
    while parent is not None:
        ancestors.append(parent)
        parent = parent.parent
    assert logging.getLogger("plugin_updater") in ancestors


def test_root_has_single_queue_handler(fresh_logger_state: None) -> None:
    """Test handlers are attached to the root logger exactly once."""
    get_logger("plugin_updater.a")
    get_logger("plugin_updater.b")

    root = logging.getLogger("plugin_updater")
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], QueueHandler)
    assert get_state().root_initialized is True


def test_file_logging_writes_records(
    fresh_logger_state: None, tmp_path: Path
) -> None:
    """Test records reach the rotating log file."""
    log_file = tmp_path / "logs" / "plugin-updater.log"
    logger = setup_logging(
        "plugin_updater.test",
        console_level="ERROR",
        file_level="DEBUG",
        log_file=log_file,
    )

    logger.info("Found %d plugins in repository '%s'", 3, "main")
    flush_all_handlers()

    assert "Found 3 plugins in repository 'main'" in log_file.read_text()
    handlers = get_state().queue_listener.handlers
    assert any(isinstance(h, RotatingFileHandler) for h in handlers)


def test_file_logging_can_be_disabled(
    fresh_logger_state: None, tmp_path: Path
) -> None:
    """Test only the console handler exists without file logging."""
    setup_logging(
        "plugin_updater.test",
        console_level="WARNING",
        file_level="INFO",
        log_file=tmp_path / "unused.log",
        enable_file_logging=False,
    )

    handlers = get_state().queue_listener.handlers
    assert len(handlers) == 1
    assert not (tmp_path / "unused.log").exists()



def test_update_logger_from_config_applies_settings_levels(
    fresh_logger_state: None, tmp_path: Path
) -> None:
    """Test settings.conf levels reach the running handlers."""
    setup_logging(
        "plugin_updater.test",
        console_level="WARNING",
        file_level="INFO",
        log_file=tmp_path / "plugin-updater.log",
    )

    update_logger_from_config(
        Settings(log_level="DEBUG", console_log_level="ERROR")
    )

    handlers = get_state().queue_listener.handlers
    file_handler = next(
        h for h in handlers if isinstance(h, RotatingFileHandler)
    )
    console_handler = next(
        h for h in handlers if not isinstance(h, RotatingFileHandler)
    )
    assert file_handler.level == logging.DEBUG
    assert console_handler.level == logging.ERROR
    assert get_state().config_applied is True


class TestHybridConsoleFormatter:
    """Test HybridConsoleFormatter output."""

    def _record(self, level: int) -> logging.LogRecord:
        return logging.LogRecord(
            name="plugin_updater.test",
            level=level,
            pathname="",
            lineno=0,
            msg="Checksum %s",
            args=("OK",),
            exc_info=None,
        )

    def test_info_is_message_only(self) -> None:
        """Test INFO records show only the message."""
        formatter = HybridConsoleFormatter("%(levelname)s - %(message)s")

        assert formatter.format(self._record(logging.INFO)) == "Checksum OK"

    def test_warning_is_colored_and_structured(self) -> None:
        """Test WARNING records carry a colored level name."""
        formatter = HybridConsoleFormatter("%(levelname)s - %(message)s")
        record = self._record(logging.WARNING)

        output = formatter.format(record)

        assert output == "\033[33mWARNING\033[0m - Checksum OK"
        assert record.levelname == "WARNING"
