"""Playback coordinator: drives one active player per screen.

Reference change -> classify -> generic player (direct media) or
embedded hosted player + background fallback resolution (hosted page).

States::

    Idle -> PlayingGeneric                       (direct media)
    Idle -> ResolvingHosted -> PlayingHosted     (hosted page, resolver ok)
                            -> Failed            (resolver error, embedded keeps playing)
    any  -> new target on every reference change
    PlayingGeneric -> Failed                     (generic player reports an error)

Only the coordinator writes ``state``. Resolution results are tagged with
the generation that started them and dropped when a newer reference has
been selected in the meantime.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Protocol

import structlog

from smartmedia.application.observable import ObservableValue
from smartmedia.domain.entities.video import (
    DirectMedia,
    PlaybackPhase,
    PlaybackSurface,
    PlaybackSurfaceState,
    ReferenceKind,
    ResolvedLocator,
)
from smartmedia.domain.errors import ResolutionError
from smartmedia.domain.ports.players import (
    GenericPlayerPort,
    HostedPlayerPort,
    SpeechSynthesizerPort,
)

log = structlog.get_logger(__name__)


class _StreamResolver(Protocol):
    """Resolves a hosted video ID to a concrete locator."""

    async def resolve(self, site_id: str) -> ResolvedLocator: ...


_ClassifyFn = Callable[[str], ReferenceKind]


class PlaybackCoordinator:
    """Owns ``PlaybackSurfaceState`` for one screen.

    Must be driven from inside a running event loop; hosted references
    spawn the fallback resolution as an ``asyncio.Task``.

    Usage::

        async with PlaybackCoordinator(...) as coordinator:
            coordinator.state.subscribe(render)
            coordinator.select_reference(url)
    """

    def __init__(
        self,
        *,
        resolver: _StreamResolver,
        classify: _ClassifyFn,
        generic_player: GenericPlayerPort,
        hosted_player: HostedPlayerPort,
        speech: SpeechSynthesizerPort,
    ) -> None:
        self._resolver = resolver
        self._classify = classify
        self._generic = generic_player
        self._hosted = hosted_player
        self._speech = speech
        self.state: ObservableValue[PlaybackSurfaceState] = ObservableValue(
            PlaybackSurfaceState()
        )
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._buffering: dict[PlaybackSurface, bool] = {}
        self._closed = False

    @property
    def current(self) -> PlaybackSurfaceState:
        return self.state.value

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _update(self, **changes: Any) -> None:
        self.state.set(replace(self.state.value, **changes))

    def _is_stale(self, generation: int, reference: str) -> bool:
        return (
            self._closed
            or generation != self._generation
            or self.state.value.reference != reference
        )

    def _cancel_pending(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    # ------------------------------------------------------------------
    # Reference changes
    # ------------------------------------------------------------------

    def select_reference(self, reference: str | None) -> None:
        """Switch playback to *reference*.

        Empty references are ignored. Any in-flight resolution for a
        previous reference is cancelled and its result discarded.
        """
        if self._closed:
            raise RuntimeError("PlaybackCoordinator is closed")
        if not reference:
            log.debug("playback_reference_ignored")
            return

        kind = self._classify(reference)
        self._generation += 1
        self._cancel_pending()
        self._buffering.clear()

        # Narration of the previous video's summary is stale now
        try:
            self._speech.stop()
        except Exception:
            log.exception("speech_stop_failed")

        if isinstance(kind, DirectMedia):
            self._start_generic(reference, kind.locator)
        else:
            self._start_hosted(reference, kind.site_id)

    def _start_generic(self, reference: str, locator: str) -> None:
        self._hosted.stop()
        self._buffering[PlaybackSurface.GENERIC] = True
        self.state.set(
            PlaybackSurfaceState(
                phase=PlaybackPhase.PLAYING_GENERIC,
                active_surface=PlaybackSurface.GENERIC,
                reference=reference,
                is_loading=True,
            )
        )
        log.info("playback_direct_media", locator=locator)
        self._generic.load(locator, kind="literal")

    def _start_hosted(self, reference: str, site_id: str) -> None:
        self._generic.stop()
        self.state.set(
            PlaybackSurfaceState(
                phase=PlaybackPhase.RESOLVING_HOSTED,
                active_surface=PlaybackSurface.HOSTED_EMBEDDED,
                reference=reference,
                hosted_site_id=site_id,
                is_loading=True,
            )
        )
        log.info("playback_hosted_page", site_id=site_id)
        self._hosted.load_video(site_id)

        task = asyncio.get_running_loop().create_task(
            self._resolve_fallback(self._generation, reference, site_id),
            name=f"resolve-{site_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _resolve_fallback(
        self, generation: int, reference: str, site_id: str
    ) -> None:
        """Resolve a generic fallback locator next to the embedded player."""
        try:
            locator = await self._resolver.resolve(site_id)
        except ResolutionError as exc:
            if self._is_stale(generation, reference):
                log.debug("playback_resolution_stale", site_id=site_id)
                return
            log.debug("playback_fallback_unavailable", site_id=site_id, error=str(exc))
            self._update(
                phase=PlaybackPhase.FAILED,
                is_loading=self._buffering.get(PlaybackSurface.HOSTED_EMBEDDED, False),
                resolution_error=str(exc),
            )
            return
        except Exception as exc:
            if self._is_stale(generation, reference):
                return
            log.exception("playback_fallback_error", site_id=site_id)
            self._update(
                phase=PlaybackPhase.FAILED,
                is_loading=self._buffering.get(PlaybackSurface.HOSTED_EMBEDDED, False),
                resolution_error=str(exc) or type(exc).__name__,
            )
            return

        if self._is_stale(generation, reference):
            log.debug("playback_resolution_stale", site_id=site_id)
            return

        self._update(
            phase=PlaybackPhase.PLAYING_HOSTED,
            is_loading=self._buffering.get(PlaybackSurface.HOSTED_EMBEDDED, False),
            fallback_locator=locator,
        )

    async def wait_idle(self) -> None:
        """Wait until no resolution task is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Player observations
    # ------------------------------------------------------------------

    def on_buffering_changed(self, surface: PlaybackSurface, buffering: bool) -> None:
        """Republish a player's buffering state as the loading indicator."""
        self._buffering[surface] = buffering
        current = self.state.value
        if self._closed or surface != current.active_surface:
            return
        resolving = current.phase == PlaybackPhase.RESOLVING_HOSTED
        self._update(is_loading=buffering or resolving)

    def on_playback_error(self, surface: PlaybackSurface, message: str) -> None:
        """Handle a load/playback failure reported by a player.

        The generic surface has no fallback, so its errors become the
        visible state. Embedded player errors are logged only.
        """
        current = self.state.value
        if self._closed or surface != current.active_surface:
            log.debug("playback_error_ignored", surface=surface.value)
            return
        if surface == PlaybackSurface.GENERIC:
            log.error("playback_generic_failed", reference=current.reference, error=message)
            self._update(phase=PlaybackPhase.FAILED, is_loading=False, error=message)
        else:
            log.warning(
                "playback_embedded_error",
                site_id=current.hosted_site_id,
                error=message,
            )

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Cancel in-flight resolution and release both players.

        Safe to call more than once; players are released exactly once.
        """
        if self._closed:
            return
        self._closed = True
        self._cancel_pending()
        try:
            self._generic.release()
        finally:
            try:
                self._hosted.release()
            finally:
                self.state.set(PlaybackSurfaceState())
                log.debug("playback_coordinator_closed")

    async def __aenter__(self) -> PlaybackCoordinator:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        pending = list(self._tasks)
        self.close()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
