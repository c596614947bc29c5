from .playback_coordinator import PlaybackCoordinator
from .resolve_stream import StreamResolverUseCase, select_locator
from .video_summary import SUMMARY_INSTRUCTION, VideoSummaryUseCase

__all__ = [
    "PlaybackCoordinator",
    "SUMMARY_INSTRUCTION",
    "StreamResolverUseCase",
    "VideoSummaryUseCase",
    "select_locator",
]
