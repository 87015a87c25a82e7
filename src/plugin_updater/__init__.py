"""Client for plugin update repositories.

Fetches plugin manifests from remote repositories, resolves release URLs and
verifies downloaded artifacts before they are handed to a plugin runtime.
"""

from plugin_updater.core.download import FileDownloader, SimpleFileDownloader
from plugin_updater.core.manager import UpdateManager
from plugin_updater.core.repository import UpdateRepository
from plugin_updater.core.verification import (
    DEFAULT_FILE_VERIFIERS,
    BasicVerifier,
    FileVerifier,
    Sha512SumVerifier,
    VerificationContext,
    verify_file,
)
from plugin_updater.domain.plugin import PluginInfo, PluginRelease
from plugin_updater.exceptions import (
    DownloadError,
    PluginUpdaterError,
    RepositoryError,
    VerifyError,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_FILE_VERIFIERS",
    "BasicVerifier",
    "DownloadError",
    "FileDownloader",
    "FileVerifier",
    "PluginInfo",
    "PluginRelease",
    "PluginUpdaterError",
    "RepositoryError",
    "Sha512SumVerifier",
    "SimpleFileDownloader",
    "UpdateManager",
    "UpdateRepository",
    "VerificationContext",
    "VerifyError",
    "verify_file",
]
