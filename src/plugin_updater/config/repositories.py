"""Repository definitions loaded from repositories.json.

The file holds a JSON array such as::

    [
        {"id": "main", "url": "https://example.com/plugins/"},
        {"id": "beta", "url": "https://example.com/beta/",
         "pluginsJsonFileName": "beta-plugins.json"}
    ]
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from plugin_updater.config.paths import Paths
from plugin_updater.constants import DEFAULT_PLUGINS_JSON_FILE_NAME
from plugin_updater.exceptions import ConfigurationError
from plugin_updater.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class RepositoryConfig:
    """A single configured update repository."""

    id: str
    url: str
    plugins_json_file_name: str = DEFAULT_PLUGINS_JSON_FILE_NAME

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RepositoryConfig":
        """Create RepositoryConfig from a repositories.json entry.

        Raises:
            ConfigurationError: If ``id`` or ``url`` is missing

        """
        repository_id = data.get("id")
        url = data.get("url")
        if not isinstance(repository_id, str) or not repository_id:
            msg = "Repository entry is missing 'id'"
            raise ConfigurationError(msg)
        if not isinstance(url, str) or not url:
            msg = "Repository entry is missing 'url'"
            raise ConfigurationError(msg, target=repository_id)

        return cls(
            id=repository_id,
            url=url,
            plugins_json_file_name=data.get("pluginsJsonFileName")
            or DEFAULT_PLUGINS_JSON_FILE_NAME,
        )


def load_repositories(path: Path | None = None) -> list[RepositoryConfig]:
    """Load repository definitions.

    Args:
        path: Path to repositories.json (defaults to Paths.REPOSITORIES_FILE)

    Returns:
        List of repository configs; empty when the file does not exist

    Raises:
        ConfigurationError: If the file is not valid JSON or an entry is
            malformed

    """
    path = path or Paths.REPOSITORIES_FILE
    if not path.exists():
        logger.debug("No repositories file at %s", path)
        return []

    with path.open("rb") as f:
        try:
            data = orjson.loads(f.read())
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON: {e}"
            raise ConfigurationError(msg, target=str(path)) from e

    if not isinstance(data, list):
        msg = "Expected a JSON array of repositories"
        raise ConfigurationError(msg, target=str(path))

    repositories = []
    for entry in data:
        if not isinstance(entry, dict):
            msg = f"Repository entry must be an object, got {entry!r}"
            raise ConfigurationError(msg, target=str(path))
        repositories.append(RepositoryConfig.from_dict(entry))

    logger.debug("Loaded %d repositories from %s", len(repositories), path)
    return repositories
