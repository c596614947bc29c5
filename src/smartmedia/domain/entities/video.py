"""Domain entities for video-source resolution and playback.

Pure value objects with no framework dependencies and no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union

# progressive: flat media file, fetched with the headers on the locator
# manifest: live DASH/HLS manifest
# literal: a direct reference passed through untouched
LocatorKind = Literal["progressive", "manifest", "literal"]
ManifestFormat = Literal["dash", "hls"]


@dataclass(frozen=True)
class DirectMedia:
    """A reference that is already a fetchable locator."""

    locator: str


@dataclass(frozen=True)
class HostedPage:
    """A link to the hosted video site that needs extraction."""

    site_id: str  # 11-character video identifier


ReferenceKind = Union[DirectMedia, HostedPage]


@dataclass(frozen=True)
class StreamCandidate:
    """One encoding offered by the playback-configuration document."""

    bitrate: int
    url: str | None = None
    mime_type: str = ""

    @property
    def is_usable(self) -> bool:
        return bool(self.url)


@dataclass(frozen=True)
class PlaybackConfig:
    """Parsed playback-configuration document for one hosted video."""

    adaptive: tuple[StreamCandidate, ...] = ()
    muxed: tuple[StreamCandidate, ...] = ()
    is_live_content: bool = False
    dash_manifest_url: str | None = None
    hls_manifest_url: str | None = None


@dataclass(frozen=True)
class ResolvedLocator:
    """Result of resolving a hosted page to a concrete media locator.

    Consumed once by the playback coordinator; never cached.
    """

    url: str
    kind: LocatorKind
    headers: dict[str, str] = field(default_factory=dict)  # Required request headers
    manifest_format: ManifestFormat | None = None

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("ResolvedLocator.url must not be empty")


class PlaybackSurface(str, Enum):
    """Which of the two mutually-exclusive player surfaces is shown."""

    NONE = "none"
    GENERIC = "generic"
    HOSTED_EMBEDDED = "hosted_embedded"


class PlaybackPhase(str, Enum):
    """Coordinator state machine phases."""

    IDLE = "idle"
    RESOLVING_HOSTED = "resolving_hosted"
    PLAYING_GENERIC = "playing_generic"
    PLAYING_HOSTED = "playing_hosted"
    FAILED = "failed"


@dataclass(frozen=True)
class PlaybackSurfaceState:
    """Snapshot of the coordinator state published to the playback surface."""

    phase: PlaybackPhase = PlaybackPhase.IDLE
    active_surface: PlaybackSurface = PlaybackSurface.NONE
    reference: str | None = None
    hosted_site_id: str | None = None
    is_loading: bool = False
    fallback_locator: ResolvedLocator | None = None
    resolution_error: str | None = None  # informational, never shown as an error
    error: str | None = None  # playback error on the generic surface
