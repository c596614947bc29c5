"""Hosted-site reference classification and playback-config extraction."""

from __future__ import annotations

from .classifier import classify
from .youtube import YouTubePlaybackConfigFetcher, extract_video_id

__all__ = ["YouTubePlaybackConfigFetcher", "classify", "extract_video_id"]
