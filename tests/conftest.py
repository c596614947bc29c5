"""Shared test fixtures for the smartmedia test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from smartmedia.domain.entities.video import PlaybackConfig, StreamCandidate

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def adaptive_config() -> PlaybackConfig:
    """Config with three usable adaptive candidates and one muxed fallback."""
    return PlaybackConfig(
        adaptive=(
            StreamCandidate(bitrate=500, url="https://cdn.example.com/500.mp4"),
            StreamCandidate(bitrate=1200, url="https://cdn.example.com/1200.mp4"),
            StreamCandidate(bitrate=900, url="https://cdn.example.com/900.mp4"),
        ),
        muxed=(StreamCandidate(bitrate=300, url="https://cdn.example.com/muxed.mp4"),),
    )


@pytest.fixture()
def live_config() -> PlaybackConfig:
    """Live config without usable candidates but with both manifests."""
    return PlaybackConfig(
        adaptive=(StreamCandidate(bitrate=4000, url=None),),
        muxed=(StreamCandidate(bitrate=300, url=""),),
        is_live_content=True,
        dash_manifest_url="https://manifest.example.com/live.mpd",
        hls_manifest_url="https://manifest.example.com/live.m3u8",
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def generic_player() -> MagicMock:
    """Mock GenericPlayerPort (synchronous methods)."""
    return MagicMock(name="generic_player")


@pytest.fixture()
def hosted_player() -> MagicMock:
    """Mock HostedPlayerPort (synchronous methods)."""
    return MagicMock(name="hosted_player")


@pytest.fixture()
def speech() -> MagicMock:
    """Mock SpeechSynthesizerPort."""
    return MagicMock(name="speech")
