"""Port for fetching the hosted site's playback-configuration document."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from smartmedia.domain.entities.video import PlaybackConfig


@runtime_checkable
class PlaybackConfigFetcherPort(Protocol):
    """Fetches and parses the playback configuration for a hosted video.

    Implementations own timeouts and transport concerns. Failures are
    raised as ``FetchError`` (network failure, site-side rejection,
    unparseable payload).
    """

    async def fetch(self, site_id: str) -> PlaybackConfig:
        """Return the parsed playback configuration for ``site_id``."""
        ...
