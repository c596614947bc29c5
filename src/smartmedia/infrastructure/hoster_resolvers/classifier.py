"""Reference classification: direct media locator vs. hosted video page."""

from __future__ import annotations

import structlog

from smartmedia.domain.entities.video import DirectMedia, HostedPage, ReferenceKind
from smartmedia.infrastructure.hoster_resolvers.youtube import extract_video_id

log = structlog.get_logger(__name__)


def classify(reference: str) -> ReferenceKind:
    """Classify a raw video reference.

    Returns ``HostedPage`` when the reference matches one of the hosted
    site's URL shapes, otherwise ``DirectMedia`` with the reference used
    verbatim. Unmatched hosted-looking links fall through to
    ``DirectMedia`` and fail later at playback.
    """
    if not reference:
        raise ValueError("reference must not be empty")

    site_id = extract_video_id(reference)
    if site_id is not None:
        return HostedPage(site_id=site_id)

    if "youtube.com" in reference or "youtu.be" in reference:
        log.warning("hosted_reference_unmatched", reference=reference)
    return DirectMedia(locator=reference)
