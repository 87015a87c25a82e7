"""Verification of downloaded plugin files.

Each verifier checks one property of a file (sanity, checksum) and raises
VerifyError on failure; verify_file() runs them in order.
"""

from plugin_updater.core.verification.chain import (
    DEFAULT_FILE_VERIFIERS,
    verify_file,
)
from plugin_updater.core.verification.checksum import (
    build_sidecar_url,
    compute_sha512,
    parse_checksum_line,
)
from plugin_updater.core.verification.context import VerificationContext
from plugin_updater.core.verification.verifiers import (
    BasicVerifier,
    FileVerifier,
    Sha512SumVerifier,
)

__all__ = [
    "DEFAULT_FILE_VERIFIERS",
    "BasicVerifier",
    "FileVerifier",
    "Sha512SumVerifier",
    "VerificationContext",
    "build_sidecar_url",
    "compute_sha512",
    "parse_checksum_line",
    "verify_file",
]
