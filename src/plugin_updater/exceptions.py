"""Exception classes for plugin-updater operations."""


class PluginUpdaterError(Exception):
    """Base exception for plugin-updater operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed (plugin id,
                repository id or file name).

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class RepositoryError(PluginUpdaterError):
    """Raised when a repository manifest cannot be fetched or parsed."""

    error_prefix = "Repository unavailable"


class VerifyError(PluginUpdaterError):
    """Raised when a downloaded file fails verification."""

    error_prefix = "Verification failed"


class DownloadError(PluginUpdaterError):
    """Raised when a release cannot be downloaded."""

    error_prefix = "Download failed"


class ConfigurationError(PluginUpdaterError):
    """Raised when settings or repository definitions are invalid."""

    error_prefix = "Invalid configuration"
