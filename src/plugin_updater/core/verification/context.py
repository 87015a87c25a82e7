"""Verification context passed to every file verifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plugin_updater.domain.plugin import PluginRelease


@dataclass(slots=True, frozen=True)
class VerificationContext:
    """Read-only view of the release a downloaded file belongs to."""

    plugin_id: str
    version: str
    url: str
    sha512sum: str | None = None

    @classmethod
    def from_release(
        cls, plugin_id: str, release: PluginRelease
    ) -> VerificationContext:
        """Build a context from a loaded manifest release."""
        return cls(
            plugin_id=plugin_id,
            version=release.version,
            url=release.url or "",
            sha512sum=release.sha512sum,
        )
