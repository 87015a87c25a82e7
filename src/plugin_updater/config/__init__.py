"""Configuration for plugin-updater.

- settings.conf (INI): log levels, network timeout, directories
- repositories.json: the update repositories to query
"""

from plugin_updater.config.paths import Paths
from plugin_updater.config.repositories import (
    RepositoryConfig,
    load_repositories,
)
from plugin_updater.config.settings import (
    NetworkSettings,
    Settings,
    SettingsManager,
)

__all__ = [
    "NetworkSettings",
    "Paths",
    "RepositoryConfig",
    "Settings",
    "SettingsManager",
    "load_repositories",
]
