from .playback_config import PlaybackConfigFetcherPort
from .players import GenericPlayerPort, HostedPlayerPort, SpeechSynthesizerPort
from .summarizer import SummarizerPort

__all__ = [
    "GenericPlayerPort",
    "HostedPlayerPort",
    "PlaybackConfigFetcherPort",
    "SpeechSynthesizerPort",
    "SummarizerPort",
]
