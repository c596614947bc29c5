"""Ports for the playback collaborators driven by the coordinator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from smartmedia.domain.entities.video import LocatorKind


@runtime_checkable
class GenericPlayerPort(Protocol):
    """Generic streaming player (progressive files, DASH/HLS manifests)."""

    def load(
        self,
        locator: str,
        *,
        kind: LocatorKind,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Set the media source, prepare it and start playback."""
        ...

    def stop(self) -> None: ...

    def release(self) -> None:
        """Free decoder and network resources. Called once on teardown."""
        ...


@runtime_checkable
class HostedPlayerPort(Protocol):
    """Embedded player widget of the hosted site.

    Takes a site identifier and performs its own resolution.
    """

    def load_video(self, site_id: str) -> None: ...

    def stop(self) -> None: ...

    def release(self) -> None: ...


@runtime_checkable
class SpeechSynthesizerPort(Protocol):
    """Text-to-speech narration of the generated summary."""

    def speak(self, text: str) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...
