"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

import httpx
from starlette.datastructures import State

from smartmedia.application.use_cases.resolve_stream import StreamResolverUseCase
from smartmedia.domain.ports import PlaybackConfigFetcherPort, SummarizerPort
from smartmedia.infrastructure.config import AppConfig


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    playback_config_fetcher: PlaybackConfigFetcherPort

    # Application Services
    stream_resolver: StreamResolverUseCase

    # Summaries (optional, needs a Gemini API key)
    summarizer: SummarizerPort | None
