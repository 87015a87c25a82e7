"""Shared fixtures for verification tests.

- plugin_file: a small non-empty file with known content
- plugin_file_sha512: its hex SHA-512 digest
- make_context: factory for VerificationContext
"""

import hashlib
from collections.abc import Callable
from pathlib import Path

import pytest

from plugin_updater.core.verification import VerificationContext

PLUGIN_CONTENT = b"test content"
RELEASE_URL = "https://example.com/repo/p1-1.0.zip"


@pytest.fixture
def plugin_file(tmp_path: Path) -> Path:
    """Create a downloaded plugin file with known content."""
    path = tmp_path / "p1-1.0.zip"
    path.write_bytes(PLUGIN_CONTENT)
    return path


@pytest.fixture
def plugin_file_sha512() -> str:
    """Return the lowercase hex SHA-512 digest of PLUGIN_CONTENT."""
    return hashlib.sha512(PLUGIN_CONTENT).hexdigest()


@pytest.fixture
def make_context() -> Callable[..., VerificationContext]:
    """Provide a VerificationContext factory."""

    def _make(
        sha512sum: str | None = None, url: str = RELEASE_URL
    ) -> VerificationContext:
        return VerificationContext(
            plugin_id="p1", version="1.0", url=url, sha512sum=sha512sum
        )

    return _make
