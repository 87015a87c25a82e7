"""Plugin manifest models.

A repository manifest (plugins.json) is a JSON array of plugins, each with
an ordered list of releases:

    [
        {
            "id": "welcome-plugin",
            "name": "Welcome Plugin",
            "releases": [
                {
                    "version": "1.0.0",
                    "date": "2020-01-01",
                    "url": "welcome-plugin-1.0.0.zip",
                    "sha512sum": ".sha512"
                }
            ]
        }
    ]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from plugin_updater.constants import EPOCH
from plugin_updater.domain.version import compare_versions, is_compatible
from plugin_updater.logger import get_logger
from plugin_updater.utils.datetime_utils import parse_release_date

logger = get_logger(__name__)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(slots=True)
class PluginRelease:
    """One downloadable version of a plugin.

    ``url`` is whatever the manifest holds until the owning repository
    rewrites it to an absolute URL during load.
    """

    version: str
    url: str | None
    date: datetime = EPOCH
    requires: str | None = None
    sha512sum: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginRelease:
        """Create a release from a manifest entry.

        Raises:
            ValueError: If the entry has no version

        """
        version = data.get("version")
        if version is None or str(version).strip() == "":
            msg = "Release entry is missing 'version'"
            raise ValueError(msg)

        return cls(
            version=str(version),
            url=_optional_str(data.get("url")),
            date=parse_release_date(data.get("date")),
            requires=_optional_str(data.get("requires")),
            sha512sum=_optional_str(data.get("sha512sum")),
        )

    def is_compatible(self, system_version: str | None) -> bool:
        """Return True if this release runs on ``system_version``."""
        return is_compatible(self.requires, system_version)


@dataclass(slots=True)
class PluginInfo:
    """A plugin as described by a repository manifest."""

    id: str
    name: str | None = None
    description: str | None = None
    provider: str | None = None
    project_url: str | None = None
    releases: list[PluginRelease] = field(default_factory=list)
    repository_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginInfo:
        """Create a plugin from a manifest entry.

        Raises:
            ValueError: If the entry has no id or its releases are not
                an array

        """
        plugin_id = data.get("id")
        if not isinstance(plugin_id, str) or not plugin_id:
            msg = "Plugin entry is missing 'id'"
            raise ValueError(msg)

        raw_releases = data.get("releases") or []
        if not isinstance(raw_releases, list):
            msg = f"'releases' of plugin '{plugin_id}' must be an array"
            raise ValueError(msg)

        releases = []
        for raw_release in raw_releases:
            if not isinstance(raw_release, dict):
                logger.warning(
                    "Skipping non-object release of plugin %s", plugin_id
                )
                continue
            try:
                releases.append(PluginRelease.from_dict(raw_release))
            except ValueError as e:
                logger.warning(
                    "Skipping release of plugin %s: %s", plugin_id, e
                )

        return cls(
            id=plugin_id,
            name=_optional_str(data.get("name")),
            description=_optional_str(data.get("description")),
            provider=_optional_str(data.get("provider")),
            project_url=_optional_str(data.get("projectUrl")),
            releases=releases,
        )

    def get_release(self, version: str) -> PluginRelease | None:
        """Return the release with the given version, if listed."""
        for release in self.releases:
            if compare_versions(release.version, version) == 0:
                return release
        return None

    def get_last_release(
        self, system_version: str | None = None
    ) -> PluginRelease | None:
        """Return the newest release compatible with ``system_version``."""
        last_release: PluginRelease | None = None
        for release in self.releases:
            if not release.is_compatible(system_version):
                continue
            if (
                last_release is None
                or compare_versions(release.version, last_release.version) > 0
            ):
                last_release = release
        return last_release

    def has_update(
        self, current_version: str, system_version: str | None = None
    ) -> bool:
        """Return True if a compatible release newer than the current exists."""
        last_release = self.get_last_release(system_version)
        return (
            last_release is not None
            and compare_versions(last_release.version, current_version) > 0
        )
