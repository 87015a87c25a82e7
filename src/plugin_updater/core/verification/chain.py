"""Running an ordered chain of verifiers against a downloaded file."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from plugin_updater.core.verification.verifiers import (
    BasicVerifier,
    FileVerifier,
    Sha512SumVerifier,
)
from plugin_updater.logger import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from plugin_updater.core.verification.context import VerificationContext

logger = get_logger(__name__)

# BasicVerifier always runs first as a sanity gate
DEFAULT_FILE_VERIFIERS: tuple[FileVerifier, ...] = (
    BasicVerifier(),
    Sha512SumVerifier(),
)


def verify_file(
    context: VerificationContext,
    file: Path,
    verifiers: Sequence[FileVerifier] = DEFAULT_FILE_VERIFIERS,
) -> None:
    """Run verifiers in order, stopping at the first failure.

    Args:
        context: Release the file was downloaded for
        file: Downloaded file
        verifiers: Verifiers to run

    Raises:
        VerifyError: From the first verifier that rejects the file
        OSError: If a verifier could not read the file

    """
    for verifier in verifiers:
        logger.debug(
            "Running %s on %s for %s@%s",
            type(verifier).__name__,
            file.name,
            context.plugin_id,
            context.version,
        )
        verifier.verify(context, file)

    logger.debug("File %s passed %d verifiers", file.name, len(verifiers))
