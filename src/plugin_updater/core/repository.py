"""Update repository backed by a remote plugins.json manifest.

The manifest is fetched lazily on first access and kept in memory until
refresh() is called. A repository that cannot be reached or returns a
broken manifest yields no plugins instead of raising, so one dead
repository never takes down the aggregate view across repositories.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlsplit

import orjson
import requests

from plugin_updater.constants import (
    DEFAULT_PLUGINS_JSON_FILE_NAME,
    REMOTE_URL_SCHEMES,
    SUPPORTED_URL_SCHEMES,
)
from plugin_updater.core.download import SimpleFileDownloader
from plugin_updater.core.http_session import fetch_bytes
from plugin_updater.domain.plugin import PluginInfo, PluginRelease
from plugin_updater.exceptions import RepositoryError
from plugin_updater.logger import get_logger
from plugin_updater.utils.datetime_utils import is_epoch

logger = get_logger(__name__)


class LoadState(Enum):
    """Lifecycle of the in-memory manifest cache."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


def resolve_release_url(base_url: str, url: str | None) -> str | None:
    """Resolve a release URL against the repository base URL.

    Args:
        base_url: Repository base URL
        url: URL from the manifest, absolute or relative

    Returns:
        Absolute URL, or None when it cannot be resolved to one with a
        supported scheme

    """
    if url is None or not url.strip():
        return None

    try:
        resolved = urljoin(base_url, url.strip())
        parts = urlsplit(resolved)
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if scheme not in SUPPORTED_URL_SCHEMES:
        return None
    if scheme in REMOTE_URL_SCHEMES and not parts.netloc:
        return None
    return resolved


class UpdateRepository:
    """A plugin update repository identified by an id and a base URL.

    Not thread-safe: concurrent first calls to get_plugins() may fetch the
    manifest more than once, which is harmless.
    """

    def __init__(
        self,
        repository_id: str,
        url: str,
        plugins_json_file_name: str = DEFAULT_PLUGINS_JSON_FILE_NAME,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            repository_id: Unique repository id
            url: Base URL; relative release URLs resolve against it
            plugins_json_file_name: Manifest file name relative to ``url``
            session: Session to reuse for HTTP requests
            timeout: Request timeout in seconds, None for no timeout

        """
        self._id = repository_id
        self._url = url
        self._plugins_json_file_name = plugins_json_file_name
        self._session = session
        self._timeout = timeout
        self._plugins: dict[str, PluginInfo] = {}
        self._state = LoadState.UNLOADED

    @property
    def id(self) -> str:
        """Repository id."""
        return self._id

    @property
    def url(self) -> str:
        """Repository base URL."""
        return self._url

    @property
    def plugins_json_file_name(self) -> str:
        """Manifest file name, relative to the base URL."""
        return self._plugins_json_file_name

    @plugins_json_file_name.setter
    def plugins_json_file_name(self, value: str) -> None:
        self._plugins_json_file_name = value

    @property
    def session(self) -> requests.Session | None:
        """Session shared with downloaders and checksum fetches."""
        return self._session

    @property
    def timeout(self) -> float | None:
        """Request timeout in seconds, None for no timeout."""
        return self._timeout

    @property
    def state(self) -> LoadState:
        """Current cache state."""
        return self._state

    def get_plugins(self) -> dict[str, PluginInfo]:
        """Return the plugins of this repository keyed by plugin id.

        The manifest is loaded on first call. Load failures are logged and
        leave the repository empty until the next refresh().
        """
        if self._state is LoadState.UNLOADED:
            self._init_plugins()
        return self._plugins

    def get_plugin(self, plugin_id: str) -> PluginInfo | None:
        """Return a single plugin, or None if the repository lacks it."""
        return self.get_plugins().get(plugin_id)

    def refresh(self) -> None:
        """Drop the cached manifest so the next access fetches it again."""
        logger.debug("Refreshing repository '%s'", self._id)
        self._plugins = {}
        self._state = LoadState.UNLOADED

    def get_file_downloader(
        self, download_dir: Path | None = None
    ) -> SimpleFileDownloader:
        """Return a downloader sharing this repository's session."""
        return SimpleFileDownloader(
            download_dir=download_dir,
            session=self._session,
            timeout=self._timeout,
        )

    def _init_plugins(self) -> None:
        self._state = LoadState.LOADING
        plugins: dict[str, PluginInfo] = {}
        try:
            plugins = self._load_plugins()
        except RepositoryError as e:
            logger.error("%s", e)
        finally:
            self._plugins = plugins
            self._state = LoadState.LOADED

    def _load_plugins(self) -> dict[str, PluginInfo]:
        try:
            plugins_url = urljoin(self._url, self._plugins_json_file_name)
        except ValueError as e:
            msg = f"Invalid repository URL {self._url}: {e}"
            raise RepositoryError(msg, target=self._id) from e
        logger.debug(
            "Read plugins of '%s' repository from '%s'", self._id, plugins_url
        )

        try:
            content = fetch_bytes(
                plugins_url, session=self._session, timeout=self._timeout
            )
        except (requests.RequestException, OSError) as e:
            msg = f"Cannot fetch {plugins_url}: {e}"
            raise RepositoryError(msg, target=self._id) from e

        try:
            data = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in {plugins_url}: {e}"
            raise RepositoryError(msg, target=self._id) from e

        if not isinstance(data, list):
            msg = f"Expected a JSON array of plugins in {plugins_url}"
            raise RepositoryError(msg, target=self._id)

        plugins: dict[str, PluginInfo] = {}
        for entry in data:
            plugin = self._parse_plugin(entry)
            if plugin is not None:
                plugins[plugin.id] = plugin

        logger.debug(
            "Found %d plugins in repository '%s'", len(plugins), self._id
        )
        return plugins

    def _parse_plugin(self, entry: Any) -> PluginInfo | None:
        if not isinstance(entry, dict):
            logger.warning(
                "Skipping non-object plugin entry in repository '%s'",
                self._id,
            )
            return None

        try:
            plugin = PluginInfo.from_dict(entry)
        except ValueError as e:
            logger.warning(
                "Skipping malformed plugin entry in repository '%s': %s",
                self._id,
                e,
            )
            return None

        plugin.releases = [
            release
            for release in plugin.releases
            if self._resolve_release(plugin, release)
        ]
        plugin.repository_id = self._id
        return plugin

    def _resolve_release(
        self, plugin: PluginInfo, release: PluginRelease
    ) -> bool:
        resolved = resolve_release_url(self._url, release.url)
        if resolved is None:
            logger.warning(
                "Skipping release %s of plugin %s due to failure to build "
                "valid absolute URL. Url was %s%s",
                release.version,
                plugin.id,
                self._url,
                release.url,
            )
            return False

        release.url = resolved
        if is_epoch(release.date):
            logger.warning(
                "Illegal release date when parsing %s@%s, setting to epoch",
                plugin.id,
                release.version,
            )
        return True
