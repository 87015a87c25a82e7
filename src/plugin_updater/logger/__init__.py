"""Logging utilities for plugin-updater.

- Colored console output
- Optional rotating log file
- QueueHandler/QueueListener so callers never block on handler I/O
- Hierarchical logger names (plugin_updater.core.repository, ...)

Usage:
    >>> from plugin_updater.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Refreshing %s", repository_id)  # %-style formatting

Rules:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Handlers live only on the root 'plugin_updater' logger
    4. Never use f-strings in log calls

Environment Variables:
    PLUGIN_UPDATER_LOG_DIR: Override the log directory (used by tests)
"""

from typing import TYPE_CHECKING

from plugin_updater.logger.config import (
    update_logger_from_config as _update_config,
)
from plugin_updater.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from plugin_updater.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from plugin_updater.logger.state import _state, get_state

if TYPE_CHECKING:
    from plugin_updater.config.settings import Settings

__all__ = [
    "ColoredConsoleFormatter",
    "HybridConsoleFormatter",
    "SimpleConsoleFormatter",
    "_state",  # For testing only
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(settings: "Settings") -> None:
    """Apply settings.conf log levels to the global logger state."""
    _update_config(get_state(), settings)
