"""Domain models for plugin manifests."""

from plugin_updater.domain.plugin import PluginInfo, PluginRelease
from plugin_updater.domain.version import compare_versions, is_compatible

__all__ = [
    "PluginInfo",
    "PluginRelease",
    "compare_versions",
    "is_compatible",
]
