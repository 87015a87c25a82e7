"""Centralized constants module for plugin-updater.

Constants are organized by logical categories and use typing.Final
annotations to ensure immutability.

Usage:
    from plugin_updater.constants import DEFAULT_PLUGINS_JSON_FILE_NAME
"""

from datetime import datetime, timezone
from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"
REPOSITORIES_FILE_NAME: Final[str] = "repositories.json"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "plugin-updater"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"
SECTION_DIRECTORY: Final[str] = "directory"

KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"
KEY_DOWNLOAD: Final[str] = "download"

VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

# Environment override for the log directory (used by the test suite)
LOG_DIR_ENV_VAR: Final[str] = "PLUGIN_UPDATER_LOG_DIR"

# =============================================================================
# Repository Constants
# =============================================================================

DEFAULT_PLUGINS_JSON_FILE_NAME: Final[str] = "plugins.json"

# Schemes a resolved release URL may carry
SUPPORTED_URL_SCHEMES: Final[frozenset[str]] = frozenset(
    {"http", "https", "file"}
)
REMOTE_URL_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})

# Releases without a parseable date are stamped with the epoch
EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Lenient date formats accepted for release dates, tried in order
RELEASE_DATE_FORMATS: Final[tuple[str, ...]] = (
    "%Y-%m-%d",
    "%b %d, %Y %I:%M:%S %p",
    "%b %d, %Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
)

# =============================================================================
# Verification Constants
# =============================================================================

# Checksum field value meaning "derive from a sidecar file next to the release"
SHA512_SIDECAR_SENTINEL: Final[str] = ".sha512"
SHA512_SIDECAR_EXTENSION: Final[str] = ".sha512"
REMOTE_CHECKSUM_PREFIXES: Final[tuple[str, ...]] = ("http://", "https://")

HASH_CHUNK_SIZE: Final[int] = 8192

# =============================================================================
# Download Constants
# =============================================================================

DOWNLOAD_CHUNK_SIZE: Final[int] = 8192
DEFAULT_DOWNLOAD_FILE_NAME: Final[str] = "download"

# =============================================================================
# Logging Constants
# =============================================================================

LOG_FILE_NAME: Final[str] = "plugin-updater.log"
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
