"""Stream resolution use case.

Hosted video ID -> playback configuration -> best playable locator.

Selection order (first non-empty wins):
    1. highest-bitrate adaptive video candidate with a url
    2. highest-bitrate muxed candidate with a url
    3. live content only: DASH manifest, else HLS manifest
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from smartmedia.domain.entities.video import (
    PlaybackConfig,
    ResolvedLocator,
    StreamCandidate,
)
from smartmedia.domain.errors import ExtractionFailedError, NoPlayableStreamError
from smartmedia.domain.ports.playback_config import PlaybackConfigFetcherPort

log = structlog.get_logger(__name__)

# Desktop browser UA the hosted site's media servers accept for progressive fetches
DEFAULT_STREAM_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def best_candidate(candidates: Iterable[StreamCandidate]) -> StreamCandidate | None:
    """Return the usable candidate with the highest bitrate.

    Ties keep the first-encountered candidate (stable sort).
    """
    ranked = sorted(
        (c for c in candidates if c.is_usable),
        key=lambda c: c.bitrate,
        reverse=True,
    )
    return ranked[0] if ranked else None


def select_locator(
    config: PlaybackConfig,
    *,
    user_agent: str = DEFAULT_STREAM_USER_AGENT,
    site_id: str = "",
) -> ResolvedLocator:
    """Pick one concrete locator out of a playback configuration.

    Raises ``NoPlayableStreamError`` when nothing usable is offered.
    """
    progressive_headers = {"User-Agent": user_agent}

    for group in (config.adaptive, config.muxed):
        candidate = best_candidate(group)
        if candidate is not None and candidate.url:
            return ResolvedLocator(
                url=candidate.url,
                kind="progressive",
                headers=dict(progressive_headers),
            )

    if config.is_live_content:
        if config.dash_manifest_url:
            return ResolvedLocator(
                url=config.dash_manifest_url, kind="manifest", manifest_format="dash"
            )
        if config.hls_manifest_url:
            return ResolvedLocator(
                url=config.hls_manifest_url, kind="manifest", manifest_format="hls"
            )

    raise NoPlayableStreamError(site_id)


class StreamResolverUseCase:
    """Resolves a hosted video ID to a directly fetchable locator.

    One network fetch per call, no retries and no caching. Retry policy
    belongs to the caller.
    """

    def __init__(
        self,
        fetcher: PlaybackConfigFetcherPort,
        *,
        stream_user_agent: str = DEFAULT_STREAM_USER_AGENT,
    ) -> None:
        self._fetcher = fetcher
        self._user_agent = stream_user_agent

    async def resolve(self, site_id: str) -> ResolvedLocator:
        """Resolve *site_id*.

        Raises ``ExtractionFailedError`` when the fetch fails and
        ``NoPlayableStreamError`` when no candidate is usable.
        """
        try:
            config = await self._fetcher.fetch(site_id)
        except Exception as exc:
            log.warning("stream_extraction_failed", site_id=site_id, error=str(exc))
            raise ExtractionFailedError(exc) from exc

        try:
            locator = select_locator(
                config, user_agent=self._user_agent, site_id=site_id
            )
        except NoPlayableStreamError:
            log.warning(
                "stream_no_playable_candidate",
                site_id=site_id,
                adaptive=len(config.adaptive),
                muxed=len(config.muxed),
                live=config.is_live_content,
            )
            raise

        log.info("stream_resolved", site_id=site_id, kind=locator.kind)
        return locator
