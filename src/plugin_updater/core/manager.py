"""Aggregated view over several update repositories.

The manager answers "which plugins exist and what is their newest
compatible release" across all configured repositories, and downloads a
release through the verifier chain before handing it to the caller.
"""

from __future__ import annotations

import contextlib
import shutil
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

import requests

from plugin_updater.config import (
    Settings,
    SettingsManager,
    load_repositories,
)
from plugin_updater.core.repository import UpdateRepository
from plugin_updater.core.verification import (
    BasicVerifier,
    FileVerifier,
    Sha512SumVerifier,
    VerificationContext,
    verify_file,
)
from plugin_updater.domain.plugin import PluginInfo, PluginRelease
from plugin_updater.exceptions import DownloadError, VerifyError
from plugin_updater.logger import get_logger, update_logger_from_config

logger = get_logger(__name__)


class UpdateManager:
    """Query repositories for plugins and fetch verified releases."""

    def __init__(
        self,
        repositories: Iterable[UpdateRepository] | None = None,
        system_version: str | None = None,
        download_dir: Path | None = None,
        verifiers: Sequence[FileVerifier] | None = None,
    ) -> None:
        """Initialize update manager.

        Args:
            repositories: Repositories to aggregate, in priority order
                (later repositories win on duplicate plugin ids)
            system_version: Host application version used to filter
                releases by their ``requires`` field
            download_dir: Where downloads go; temporary dirs when omitted
            verifiers: Verifier chain; BasicVerifier then Sha512SumVerifier
                by default

        """
        self._repositories: list[UpdateRepository] = list(repositories or [])
        self.system_version = system_version
        self.download_dir = download_dir
        self._verifiers = verifiers

    @classmethod
    def from_config(
        cls,
        repositories_file: Path | None = None,
        settings: Settings | None = None,
        system_version: str | None = None,
        session: requests.Session | None = None,
    ) -> UpdateManager:
        """Build a manager from repositories.json and settings.conf.

        The settings' log levels are applied to the running logger.

        Raises:
            ConfigurationError: If either file is invalid

        """
        settings = settings or SettingsManager().load()
        update_logger_from_config(settings)
        timeout = settings.network.timeout_seconds
        repositories = [
            UpdateRepository(
                config.id,
                config.url,
                config.plugins_json_file_name,
                session=session,
                timeout=timeout,
            )
            for config in load_repositories(repositories_file)
        ]
        return cls(
            repositories,
            system_version=system_version,
            download_dir=settings.download_dir,
            verifiers=(
                BasicVerifier(),
                Sha512SumVerifier(session=session, timeout=timeout),
            ),
        )

    def get_repositories(self) -> list[UpdateRepository]:
        """Return the configured repositories."""
        return list(self._repositories)

    def get_repository(self, repository_id: str) -> UpdateRepository | None:
        """Return a repository by id."""
        for repository in self._repositories:
            if repository.id == repository_id:
                return repository
        return None

    def add_repository(self, repository: UpdateRepository) -> None:
        """Add a repository.

        Raises:
            ValueError: If a repository with the same id already exists

        """
        if self.get_repository(repository.id) is not None:
            msg = f"Repository with id '{repository.id}' already exists"
            raise ValueError(msg)
        self._repositories.append(repository)

    def remove_repository(self, repository_id: str) -> bool:
        """Remove a repository by id; return True if one was removed."""
        repository = self.get_repository(repository_id)
        if repository is None:
            logger.warning("Repository '%s' not found", repository_id)
            return False
        self._repositories.remove(repository)
        return True

    def refresh(self) -> None:
        """Make every repository fetch its manifest again on next access."""
        for repository in self._repositories:
            repository.refresh()

    def get_plugins(self) -> list[PluginInfo]:
        """Return the plugins of all repositories, duplicates included."""
        plugins: list[PluginInfo] = []
        for repository in self._repositories:
            plugins.extend(repository.get_plugins().values())
        return plugins

    def get_plugins_map(self) -> dict[str, PluginInfo]:
        """Return all plugins keyed by id; later repositories win."""
        plugins: dict[str, PluginInfo] = {}
        for repository in self._repositories:
            plugins.update(repository.get_plugins())
        return plugins

    def get_plugin(self, plugin_id: str) -> PluginInfo | None:
        """Return a plugin by id from any repository."""
        return self.get_plugins_map().get(plugin_id)

    def get_last_release(self, plugin_id: str) -> PluginRelease | None:
        """Return the newest release compatible with the system version."""
        plugin = self.get_plugin(plugin_id)
        if plugin is None:
            return None
        return plugin.get_last_release(self.system_version)

    def get_updates(self, installed: Mapping[str, str]) -> list[PluginInfo]:
        """Return installed plugins that have a newer compatible release.

        Args:
            installed: Installed plugin versions keyed by plugin id

        """
        updates = []
        for plugin_id, current_version in installed.items():
            plugin = self.get_plugin(plugin_id)
            if plugin is not None and plugin.has_update(
                current_version, self.system_version
            ):
                updates.append(plugin)
        return updates

    def has_plugin_updates(self, installed: Mapping[str, str]) -> bool:
        """Return True if any installed plugin has an update."""
        return bool(self.get_updates(installed))

    def download_plugin(
        self, plugin_id: str, version: str | None = None
    ) -> Path:
        """Download and verify a plugin release.

        Args:
            plugin_id: Plugin to download
            version: Release version; the newest compatible one when omitted

        Returns:
            Path of the verified file

        Raises:
            DownloadError: If the plugin or release is unknown or the
                download fails
            VerifyError: If the file fails verification (it is deleted, along
                with its temporary directory when no download_dir is set)
            OSError: If the downloaded file could not be read

        """
        plugin = self.get_plugin(plugin_id)
        if plugin is None:
            msg = "Plugin not found in any repository"
            raise DownloadError(msg, target=plugin_id)

        if version is None:
            release = plugin.get_last_release(self.system_version)
        else:
            release = plugin.get_release(version)
        if release is None or release.url is None:
            msg = f"No release matching version '{version or 'latest'}'"
            raise DownloadError(msg, target=plugin_id)

        repository = (
            self.get_repository(plugin.repository_id)
            if plugin.repository_id
            else None
        )
        if repository is None:
            msg = f"Repository '{plugin.repository_id}' is not configured"
            raise DownloadError(msg, target=plugin_id)

        logger.info("Downloading %s@%s", plugin_id, release.version)
        downloader = repository.get_file_downloader(self.download_dir)
        file = downloader.download(release.url)

        context = VerificationContext.from_release(plugin_id, release)
        verifiers = self._verifiers
        if verifiers is None:
            verifiers = (
                BasicVerifier(),
                Sha512SumVerifier(
                    session=repository.session, timeout=repository.timeout
                ),
            )
        try:
            verify_file(context, file, verifiers)
        except VerifyError:
            logger.warning("Deleting %s after failed verification", file)
            if self.download_dir is None:
                shutil.rmtree(file.parent, ignore_errors=True)
            else:
                with contextlib.suppress(OSError):
                    file.unlink()
            raise

        return file
