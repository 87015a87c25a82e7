"""Pytest configuration and fixtures for plugin-updater tests."""

import logging
import os
import tempfile

import pytest

# Keep test logs out of ~/.config before any plugin_updater module is imported
os.environ.setdefault(
    "PLUGIN_UPDATER_LOG_DIR",
    os.path.join(tempfile.gettempdir(), "plugin-updater-test-logs"),
)


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all package loggers during tests.

    The package root logger is created with propagate=False; turning it on
    lets pytest's caplog fixture see records from every module.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("plugin_updater"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value
