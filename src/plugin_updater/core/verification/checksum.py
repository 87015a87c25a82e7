"""Checksum helpers: hashing, sidecar URLs and sidecar line parsing."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

from plugin_updater.constants import HASH_CHUNK_SIZE, SHA512_SIDECAR_EXTENSION

if TYPE_CHECKING:
    from pathlib import Path


def compute_sha512(file_path: Path) -> str:
    """Compute the hex SHA-512 digest of a file.

    Raises:
        OSError: If the file cannot be read

    """
    hasher = hashlib.sha512()
    with file_path.open("rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def build_sidecar_url(release_url: str) -> str:
    """Derive the ``.sha512`` sidecar URL of a release.

    The extension of the last path segment is replaced; a segment without
    an extension gets the suffix appended. Query and fragment are dropped.

    Example:
        https://example.com/repo/p1-1.0.zip -> https://example.com/repo/p1-1.0.sha512

    """
    parts = urlsplit(release_url)
    directory, _, filename = parts.path.rpartition("/")
    stem, dot, _ = filename.rpartition(".")
    if not dot or not stem:
        stem = filename
    path = f"{directory}/{stem}{SHA512_SIDECAR_EXTENSION}"
    if not directory and not parts.path.startswith("/"):
        path = f"{stem}{SHA512_SIDECAR_EXTENSION}"
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def parse_checksum_line(line: str) -> str:
    """Return the hash from a ``sha512sum``-style line.

    ``"<hash>  <filename>"`` and a bare ``"<hash>"`` both yield ``<hash>``;
    an empty line yields an empty string.
    """
    tokens = line.split()
    return tokens[0] if tokens else ""
