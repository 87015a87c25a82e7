"""Tests for PluginInfo and PluginRelease."""

import logging
from datetime import datetime, timezone

import pytest

from plugin_updater.constants import EPOCH
from plugin_updater.domain.plugin import PluginInfo, PluginRelease


class TestPluginRelease:
    """Test PluginRelease.from_dict and compatibility."""

    def test_from_dict(self) -> None:
        """Test all manifest fields are read."""
        release = PluginRelease.from_dict(
            {
                "version": "1.2.0",
                "url": "p1-1.2.0.zip",
                "date": "2021-03-04",
                "requires": ">=2.0",
                "sha512sum": "ABCDEF",
            }
        )

        assert release.version == "1.2.0"
        assert release.url == "p1-1.2.0.zip"
        assert release.date == datetime(2021, 3, 4, tzinfo=timezone.utc)
        assert release.requires == ">=2.0"
        assert release.sha512sum == "ABCDEF"

    def test_optional_fields_default(self) -> None:
        """Test missing optional fields become None or epoch."""
        release = PluginRelease.from_dict({"version": "1.0"})

        assert release.url is None
        assert release.date == EPOCH
        assert release.requires is None
        assert release.sha512sum is None

    def test_numeric_version_is_stringified(self) -> None:
        """Test a numeric version in JSON is kept as text."""
        assert PluginRelease.from_dict({"version": 2}).version == "2"

    @pytest.mark.parametrize("data", [{}, {"version": ""}, {"version": None}])
    def test_missing_version(self, data: dict) -> None:
        """Test a release without version is rejected."""
        with pytest.raises(ValueError, match="version"):
            PluginRelease.from_dict(data)

    def test_is_compatible(self) -> None:
        """Test requires is checked against the system version."""
        release = PluginRelease(version="1.0", url=None, requires=">=2.0")

        assert release.is_compatible("2.1") is True
        assert release.is_compatible("1.9") is False
        assert release.is_compatible(None) is True


class TestPluginInfo:
    """Test PluginInfo parsing and release selection."""

    def test_from_dict(self) -> None:
        """Test plugin metadata and releases are read in order."""
        plugin = PluginInfo.from_dict(
            {
                "id": "p1",
                "name": "Plugin One",
                "description": "Does things",
                "provider": "Example Inc",
                "projectUrl": "https://example.com/p1",
                "releases": [
                    {"version": "1.0", "url": "a.zip"},
                    {"version": "0.9", "url": "b.zip"},
                ],
            }
        )

        assert plugin.id == "p1"
        assert plugin.name == "Plugin One"
        assert plugin.description == "Does things"
        assert plugin.provider == "Example Inc"
        assert plugin.project_url == "https://example.com/p1"
        assert [r.version for r in plugin.releases] == ["1.0", "0.9"]
        assert plugin.repository_id is None

    def test_missing_releases_is_empty(self) -> None:
        """Test a plugin without releases has an empty list."""
        assert PluginInfo.from_dict({"id": "p1"}).releases == []

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "no id"},
            {"id": ""},
            {"id": "p1", "releases": {"version": "1.0"}},
        ],
    )
    def test_malformed_entries(self, data: dict) -> None:
        """Test structurally invalid entries raise ValueError."""
        with pytest.raises(ValueError):
            PluginInfo.from_dict(data)

    def test_bad_releases_are_skipped(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test one broken release does not reject the whole plugin."""
        with caplog.at_level(logging.WARNING):
            plugin = PluginInfo.from_dict(
                {
                    "id": "p1",
                    "releases": [
                        "1.0",
                        {"url": "a.zip"},
                        {"version": "1.1", "url": "b.zip"},
                    ],
                }
            )

        assert [r.version for r in plugin.releases] == ["1.1"]
        assert "Skipping non-object release of plugin p1" in caplog.text
        assert "Skipping release of plugin p1" in caplog.text

    def test_get_release(self) -> None:
        """Test lookup by version, tolerating a 'v' prefix."""
        plugin = PluginInfo.from_dict(
            {"id": "p1", "releases": [{"version": "1.0.0", "url": "a.zip"}]}
        )

        assert plugin.get_release("1.0.0") is plugin.releases[0]
        assert plugin.get_release("v1.0.0") is plugin.releases[0]
        assert plugin.get_release("2.0") is None

    def test_get_last_release(self) -> None:
        """Test the newest compatible release wins regardless of order."""
        plugin = PluginInfo.from_dict(
            {
                "id": "p1",
                "releases": [
                    {"version": "1.2.0", "url": "a.zip"},
                    {"version": "1.10.0", "url": "b.zip", "requires": ">=3"},
                    {"version": "1.9.0", "url": "c.zip"},
                ],
            }
        )

        assert plugin.get_last_release().version == "1.10.0"
        assert plugin.get_last_release("2.0").version == "1.9.0"

    def test_get_last_release_none_compatible(self) -> None:
        """Test no release is returned when nothing fits the system."""
        plugin = PluginInfo.from_dict(
            {
                "id": "p1",
                "releases": [{"version": "1.0", "requires": ">=9"}],
            }
        )

        assert plugin.get_last_release("1.0") is None

    def test_has_update(self) -> None:
        """Test update detection compares against the newest release."""
        plugin = PluginInfo.from_dict(
            {
                "id": "p1",
                "releases": [
                    {"version": "1.0"},
                    {"version": "1.1"},
                ],
            }
        )

        assert plugin.has_update("1.0") is True
        assert plugin.has_update("1.1") is False
        assert plugin.has_update("2.0") is False
