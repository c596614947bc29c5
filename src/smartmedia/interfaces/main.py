from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request

from smartmedia.infrastructure.config import AppConfig
from smartmedia.interfaces.app_state import AppState
from smartmedia.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def build_app(config: AppConfig) -> FastAPI:
    """Build the FastAPI app. Configuration only, no resource setup.

    Resources (HTTP client, fetcher, resolver, summarizer) are created in
    lifespan().
    """
    app = FastAPI(
        title="SmartMedia",
        description="Video reference resolution and AI summaries",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from smartmedia.interfaces.api.router import router as media_router

    app.include_router(media_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=getattr(response, "status_code", 500),
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
