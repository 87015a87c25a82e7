"""INI settings for plugin-updater (settings.conf).

Example settings.conf:

    [DEFAULT]
    log_level = INFO
    console_log_level = WARNING

    [network]
    # Seconds; leave empty to wait as long as the server does
    timeout_seconds = 30

    [directory]
    download = ~/.config/plugin-updater/downloads
"""

import configparser
from dataclasses import dataclass, field
from pathlib import Path

from plugin_updater.config.paths import Paths
from plugin_updater.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_DOWNLOAD,
    KEY_LOG_LEVEL,
    KEY_TIMEOUT_SECONDS,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_NETWORK,
    VALID_LOG_LEVELS,
)
from plugin_updater.exceptions import ConfigurationError
from plugin_updater.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class NetworkSettings:
    """Network settings; ``timeout_seconds=None`` means no client timeout."""

    timeout_seconds: float | None = None


@dataclass(slots=True, frozen=True)
class Settings:
    """Application settings loaded from settings.conf."""

    log_level: str = DEFAULT_LOG_LEVEL
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL
    network: NetworkSettings = field(default_factory=NetworkSettings)
    download_dir: Path = Paths.DOWNLOAD_DIR


class SettingsManager:
    """Loads settings.conf into a Settings instance."""

    def __init__(self, settings_file: Path | None = None) -> None:
        """Initialize settings manager.

        Args:
            settings_file: Path to settings.conf
                (defaults to Paths.SETTINGS_FILE)

        """
        self.settings_file = settings_file or Paths.SETTINGS_FILE

    def _create_parser(self) -> configparser.ConfigParser:
        return configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )

    def load(self) -> Settings:
        """Load settings, falling back to defaults for anything missing.

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If the file is unreadable or holds
                invalid values

        """
        if not self.settings_file.exists():
            logger.debug(
                "Settings file %s not found, using defaults",
                self.settings_file,
            )
            return Settings()

        parser = self._create_parser()
        try:
            with self.settings_file.open(encoding="utf-8") as f:
                parser.read_file(f)
        except (OSError, configparser.Error) as e:
            msg = f"Cannot read settings file: {e}"
            raise ConfigurationError(msg, target=str(self.settings_file)) from e

        defaults = parser[SECTION_DEFAULT]
        log_level = self._parse_log_level(
            defaults.get(KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL), KEY_LOG_LEVEL
        )
        console_log_level = self._parse_log_level(
            defaults.get(KEY_CONSOLE_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL),
            KEY_CONSOLE_LOG_LEVEL,
        )

        network = NetworkSettings()
        if parser.has_section(SECTION_NETWORK):
            network = NetworkSettings(
                timeout_seconds=self._parse_timeout(
                    parser.get(
                        SECTION_NETWORK, KEY_TIMEOUT_SECONDS, fallback=""
                    )
                )
            )

        download_dir = Paths.DOWNLOAD_DIR
        if parser.has_section(SECTION_DIRECTORY):
            directory = parser[SECTION_DIRECTORY]
            if directory.get(KEY_DOWNLOAD):
                download_dir = Path(directory[KEY_DOWNLOAD]).expanduser()

        return Settings(
            log_level=log_level,
            console_log_level=console_log_level,
            network=network,
            download_dir=download_dir,
        )

    def _parse_log_level(self, value: str, key: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            msg = f"{key} must be one of {', '.join(VALID_LOG_LEVELS)}"
            raise ConfigurationError(msg, target=str(self.settings_file))
        return level

    def _parse_timeout(self, value: str) -> float | None:
        value = value.strip()
        if not value:
            return None
        try:
            timeout = float(value)
        except ValueError as e:
            msg = f"{KEY_TIMEOUT_SECONDS} must be a number, got '{value}'"
            raise ConfigurationError(
                msg, target=str(self.settings_file)
            ) from e
        if timeout <= 0:
            msg = f"{KEY_TIMEOUT_SECONDS} must be positive, got '{value}'"
            raise ConfigurationError(msg, target=str(self.settings_file))
        return timeout
