"""Path constants for plugin-updater configuration."""

from pathlib import Path

from plugin_updater.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    REPOSITORIES_FILE_NAME,
)


class Paths:
    """Application paths and directory structure."""

    HOME_DIR = Path.home()
    CONFIG_DIR = HOME_DIR / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR

    DOWNLOAD_DIR = CONFIG_DIR / "downloads"

    SETTINGS_FILE = CONFIG_DIR / CONFIG_FILE_NAME
    REPOSITORIES_FILE = CONFIG_DIR / REPOSITORIES_FILE_NAME
