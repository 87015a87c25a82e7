"""Bootstrap and runtime configuration for the logging system."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from plugin_updater.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV_VAR,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from plugin_updater.config.settings import Settings
    from plugin_updater.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load bootstrap console level, file level and log file path.

    These are defaults only; settings.conf is applied later through
    update_logger_from_config() so the logger never imports the config
    package during module initialization.

    The log directory can be overridden with PLUGIN_UPDATER_LOG_DIR, which the
    test suite uses to keep test logs out of the user's home directory.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home()
            / CONFIG_DIR_NAME
            / DEFAULT_CONFIG_SUBDIR
            / "logs"
            / LOG_FILE_NAME
        )

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(
    state: "_LoggerState", settings: "Settings"
) -> None:
    """Apply log levels from settings to the running handlers.

    Only handler levels change; handlers are never added or removed.

    Args:
        state: Logger state object
        settings: Loaded application settings

    """
    console_level = getattr(
        logging, settings.console_log_level, logging.WARNING
    )
    file_level = getattr(logging, settings.log_level, logging.INFO)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)

    state.config_applied = True
