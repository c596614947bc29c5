from .summary import (
    OutputTextState,
    SummaryError,
    SummaryInitial,
    SummaryLoading,
    SummarySuccess,
)
from .video import (
    DirectMedia,
    HostedPage,
    LocatorKind,
    ManifestFormat,
    PlaybackConfig,
    PlaybackPhase,
    PlaybackSurface,
    PlaybackSurfaceState,
    ReferenceKind,
    ResolvedLocator,
    StreamCandidate,
)

__all__ = [
    "DirectMedia",
    "HostedPage",
    "LocatorKind",
    "ManifestFormat",
    "OutputTextState",
    "PlaybackConfig",
    "PlaybackPhase",
    "PlaybackSurface",
    "PlaybackSurfaceState",
    "ReferenceKind",
    "ResolvedLocator",
    "StreamCandidate",
    "SummaryError",
    "SummaryInitial",
    "SummaryLoading",
    "SummarySuccess",
]
