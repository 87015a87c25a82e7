"""Standard file verifiers.

A verifier inspects a freshly downloaded file and raises VerifyError when
it must not be trusted. Other implementations could scan for malware or
check signatures; anything with a matching ``verify`` method plugs into
:func:`plugin_updater.core.verification.chain.verify_file`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import requests

from plugin_updater.constants import (
    REMOTE_CHECKSUM_PREFIXES,
    SHA512_SIDECAR_SENTINEL,
)
from plugin_updater.core.http_session import fetch_first_line
from plugin_updater.core.verification.checksum import (
    build_sidecar_url,
    compute_sha512,
    parse_checksum_line,
)
from plugin_updater.exceptions import VerifyError
from plugin_updater.logger import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from plugin_updater.core.verification.context import VerificationContext

logger = get_logger(__name__)


class FileVerifier(Protocol):
    """Capability shared by all verifiers."""

    def verify(self, context: VerificationContext, file: Path) -> None:
        """Verify ``file`` for the release described by ``context``.

        Raises:
            VerifyError: If the file fails verification
            OSError: If the file could not be read

        """
        ...


class BasicVerifier:
    """Verifies that the file exists, is a regular file and is not empty."""

    def verify(self, context: VerificationContext, file: Path) -> None:
        """Fail missing, irregular or zero-length files."""
        if not file.is_file() or file.stat().st_size == 0:
            msg = f"File {file} is not a regular file or has size 0"
            raise VerifyError(msg, target=context.plugin_id)


class Sha512SumVerifier:
    """Verifies the SHA-512 checksum of a download against the manifest.

    Useful when a repository points at third-party download locations that
    could have been tampered with. The manifest's ``sha512sum`` field is
    resolved in this order:

    1. missing: nothing to check
    2. ``.sha512``: read the sidecar file next to the release URL
    3. an http(s) URL: read the checksum from that URL
    4. anything else: the expected hex digest itself
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize verifier.

        Args:
            session: Session used to fetch remote checksums
            timeout: Request timeout in seconds, None for no timeout

        """
        self.session = session
        self.timeout = timeout

    def verify(self, context: VerificationContext, file: Path) -> None:
        """Compare the file's SHA-512 digest with the expected one.

        Raises:
            VerifyError: On mismatch or when a remote checksum cannot be
                fetched
            OSError: If the file cannot be read

        """
        expected = self._resolve_expected_checksum(context, file.name)
        if expected is None:
            logger.debug("No sha512 checksum specified, skipping verification")
            return

        logger.debug("Verifying sha512 checksum of file %s", file.name)
        actual = compute_sha512(file)
        if actual.lower() == expected.lower():
            logger.debug("Checksum OK")
            return

        msg = (
            f"SHA512 checksum of downloaded file {file.name} does not match "
            f"that from plugin descriptor. Got {actual} but expected {expected}"
        )
        raise VerifyError(msg, target=context.plugin_id)

    def _resolve_expected_checksum(
        self, context: VerificationContext, file_name: str
    ) -> str | None:
        checksum = context.sha512sum
        if checksum is None:
            return None

        if checksum.lower() == SHA512_SIDECAR_SENTINEL:
            return self._fetch_checksum(
                build_sidecar_url(context.url), context, file_name
            )
        if checksum.lower().startswith(REMOTE_CHECKSUM_PREFIXES):
            return self._fetch_checksum(checksum, context, file_name)
        return checksum.strip()

    def _fetch_checksum(
        self, url: str, context: VerificationContext, file_name: str
    ) -> str:
        logger.debug("Fetching sha512 checksum from %s", url)
        try:
            line = fetch_first_line(
                url, session=self.session, timeout=self.timeout
            )
        except (requests.RequestException, OSError) as e:
            msg = (
                f"SHA512 checksum verification of {file_name} failed, could "
                f"not download SHA512 file ({url}): {e}"
            )
            raise VerifyError(msg, target=context.plugin_id) from e

        expected = parse_checksum_line(line)
        if not expected:
            msg = f"SHA512 checksum file {url} for {file_name} is empty"
            raise VerifyError(msg, target=context.plugin_id)
        return expected
