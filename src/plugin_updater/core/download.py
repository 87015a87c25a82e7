"""Downloading plugin release files.

The download itself is a collaborator of the update flow: given a release
URL it returns a local file, which is then run through the verifiers.
"""

import contextlib
import shutil
import tempfile
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlsplit

import requests

from plugin_updater.constants import (
    DEFAULT_DOWNLOAD_FILE_NAME,
    DOWNLOAD_CHUNK_SIZE,
    SUPPORTED_URL_SCHEMES,
)
from plugin_updater.core.http_session import (
    create_http_session,
    file_url_to_path,
    is_file_url,
)
from plugin_updater.exceptions import DownloadError
from plugin_updater.logger import get_logger

logger = get_logger(__name__)


class FileDownloader(Protocol):
    """Downloads a release URL to a local file."""

    def download(self, url: str) -> Path:
        """Download ``url`` and return the local path.

        Raises:
            DownloadError: If the file cannot be downloaded

        """
        ...


def get_filename_from_url(url: str) -> str:
    """Extract the file name from the last path segment of a URL."""
    name = unquote(urlsplit(url).path.rstrip("/").rpartition("/")[2])
    return name or DEFAULT_DOWNLOAD_FILE_NAME


class SimpleFileDownloader:
    """Downloads http(s) URLs with streaming GETs and copies file URLs."""

    def __init__(
        self,
        download_dir: Path | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize downloader.

        Args:
            download_dir: Destination directory; a fresh temporary
                directory per download when omitted, removed again if the
                download fails
            session: Session to reuse for HTTP downloads
            timeout: Request timeout in seconds, None for no timeout

        """
        self.download_dir = download_dir
        self.session = session
        self.timeout = timeout

    def download(self, url: str) -> Path:
        """Download ``url`` into the download directory.

        Raises:
            DownloadError: If the scheme is unsupported or the transfer fails

        """
        scheme = urlsplit(url).scheme.lower()
        if scheme not in SUPPORTED_URL_SCHEMES:
            msg = f"URL scheme '{scheme}' is not supported"
            raise DownloadError(msg, target=url)

        dest = self._destination_for(url)
        try:
            if is_file_url(url):
                self._copy_local_file(url, dest)
            else:
                self._download_http(url, dest)
        except DownloadError:
            if self.download_dir is None:
                shutil.rmtree(dest.parent, ignore_errors=True)
            raise

        logger.debug("Downloaded %s to %s", url, dest)
        return dest

    def _destination_for(self, url: str) -> Path:
        if self.download_dir is None:
            directory = Path(tempfile.mkdtemp(prefix="plugin-updater-"))
        else:
            directory = self.download_dir
            directory.mkdir(parents=True, exist_ok=True)
        return directory / get_filename_from_url(url)

    def _copy_local_file(self, url: str, dest: Path) -> None:
        source = file_url_to_path(url)
        if not source.is_file():
            msg = f"{source} does not exist or is not a file"
            raise DownloadError(msg, target=url)
        try:
            shutil.copyfile(source, dest)
        except OSError as e:
            self._cleanup(dest)
            raise DownloadError(str(e), target=url) from e

    def _download_http(self, url: str, dest: Path) -> None:
        logger.debug("Downloading file: %s", dest.name)
        logger.debug("   URL: %s", url)
        try:
            if self.session is not None:
                self._stream_to_file(self.session, url, dest)
            else:
                with create_http_session() as session:
                    self._stream_to_file(session, url, dest)
        except (requests.RequestException, OSError) as e:
            self._cleanup(dest)
            raise DownloadError(str(e), target=url) from e

    def _stream_to_file(
        self, session: requests.Session, url: str, dest: Path
    ) -> None:
        with session.get(url, stream=True, timeout=self.timeout) as response:
            response.raise_for_status()
            with dest.open("wb") as f:
                for chunk in response.iter_content(
                    chunk_size=DOWNLOAD_CHUNK_SIZE
                ):
                    f.write(chunk)

    def _cleanup(self, dest: Path) -> None:
        if dest.exists():
            logger.debug("Removing partial download: %s", dest)
            with contextlib.suppress(OSError):
                dest.unlink()
