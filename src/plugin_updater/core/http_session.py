"""HTTP session utilities for plugin-updater.

Everything here is synchronous and blocking. ``file://`` URLs are read from
the local filesystem so repositories can live on disk.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

import requests

from plugin_updater.logger import get_logger

logger = get_logger(__name__)

USER_AGENT = "plugin-updater"


@contextmanager
def create_http_session() -> Iterator[requests.Session]:
    """Create an HTTP session that is closed on exit.

    Yields:
        Configured requests.Session

    """
    with requests.Session() as session:
        session.headers["User-Agent"] = USER_AGENT
        yield session


def is_file_url(url: str) -> bool:
    """Return True for ``file://`` URLs."""
    return urlsplit(url).scheme.lower() == "file"


def file_url_to_path(url: str) -> Path:
    """Convert a ``file://`` URL to a local path."""
    return Path(url2pathname(urlsplit(url).path))


def _get(session: requests.Session, url: str, timeout: float | None) -> bytes:
    with session.get(url, timeout=timeout) as response:
        response.raise_for_status()
        return response.content


def fetch_bytes(
    url: str,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> bytes:
    """Fetch the full body of a URL.

    Args:
        url: http(s) or file URL
        session: Session to reuse; a short-lived one is created otherwise
        timeout: Request timeout in seconds, None for no timeout

    Returns:
        Response body

    Raises:
        requests.RequestException: On transport failure or HTTP error status
        OSError: If a file URL cannot be read

    """
    if is_file_url(url):
        path = file_url_to_path(url)
        logger.debug("Reading %s from local file %s", url, path)
        return path.read_bytes()

    logger.debug("GET %s", url)
    if session is not None:
        return _get(session, url, timeout)
    with create_http_session() as own_session:
        return _get(own_session, url, timeout)


def fetch_first_line(
    url: str,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> str:
    """Fetch a URL and return the first line of its body, stripped.

    Returns:
        First line, or an empty string when the body is empty

    """
    content = fetch_bytes(url, session=session, timeout=timeout)
    lines = content.decode("utf-8", errors="replace").splitlines()
    return lines[0].strip() if lines else ""
