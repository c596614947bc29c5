"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from smartmedia.application.use_cases.resolve_stream import StreamResolverUseCase
from smartmedia.domain.ports import SummarizerPort
from smartmedia.infrastructure.config.schema import AppConfig
from smartmedia.infrastructure.hoster_resolvers import YouTubePlaybackConfigFetcher
from smartmedia.infrastructure.summarization import GeminiSummarizer
from smartmedia.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def _build_summarizer(config: AppConfig) -> SummarizerPort | None:
    """Create the Gemini summarizer, or None when no API key is available."""
    api_key = config.summary.gemini_api_key
    if not api_key:
        log.info("summarizer_disabled", reason="no_api_key")
        return None

    log.info("summarizer_initialized", model=config.summary.model)
    return GeminiSummarizer(api_key=api_key, model=config.summary.model)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP Client (shared by the fetcher)
        2. Playback-config fetcher
        3. Stream resolver
        4. Summarizer (optional)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 2) Playback-config fetcher for the hosted site
    extraction = config.extraction
    state.playback_config_fetcher = YouTubePlaybackConfigFetcher(
        state.http_client,
        api_url=extraction.player_api_url,
        client_name=extraction.client_name,
        client_version=extraction.client_version,
        timeout=extraction.request_timeout_seconds,
    )

    # 3) Stream resolver
    state.stream_resolver = StreamResolverUseCase(
        state.playback_config_fetcher,
        stream_user_agent=extraction.stream_user_agent,
    )

    # 4) Summarizer
    state.summarizer = _build_summarizer(config)

    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
