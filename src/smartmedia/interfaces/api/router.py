"""Media API endpoints (classify, resolve, summarize)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from smartmedia.application.use_cases.video_summary import VideoSummaryUseCase
from smartmedia.domain.entities.summary import SummarySuccess
from smartmedia.domain.entities.video import DirectMedia, HostedPage, ResolvedLocator
from smartmedia.domain.errors import ExtractionFailedError, NoPlayableStreamError
from smartmedia.infrastructure.hoster_resolvers import classify
from smartmedia.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["media"])


class SummarizeRequest(BaseModel):
    locator: str = Field(min_length=1)


def _error(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": error, "detail": detail}
    )


def _locator_payload(locator: ResolvedLocator) -> dict[str, Any]:
    return {
        "url": locator.url,
        "kind": locator.kind,
        "headers": locator.headers,
        "manifest_format": locator.manifest_format,
    }


@router.get("/classify")
async def classify_reference(reference: str = Query(min_length=1)) -> JSONResponse:
    kind = classify(reference)
    if isinstance(kind, HostedPage):
        return JSONResponse(content={"kind": "hosted", "site_id": kind.site_id})
    return JSONResponse(content={"kind": "direct", "locator": kind.locator})


@router.get("/resolve")
async def resolve_reference(
    request: Request,
    reference: str = Query(min_length=1),
) -> JSONResponse:
    """Resolve a reference to something the generic player can load."""
    state = cast(AppState, request.app.state)
    kind = classify(reference)

    if isinstance(kind, DirectMedia):
        return JSONResponse(
            content={
                "reference_kind": "direct",
                "url": kind.locator,
                "kind": "literal",
                "headers": {},
                "manifest_format": None,
            }
        )

    try:
        locator = await state.stream_resolver.resolve(kind.site_id)
    except ExtractionFailedError as exc:
        return _error(502, "extraction_failed", str(exc))
    except NoPlayableStreamError as exc:
        return _error(404, "no_playable_stream", str(exc))

    return JSONResponse(
        content={
            "reference_kind": "hosted",
            "site_id": kind.site_id,
            **_locator_payload(locator),
        }
    )


@router.post("/summarize")
async def summarize_video(request: Request, body: SummarizeRequest) -> JSONResponse:
    state = cast(AppState, request.app.state)
    if state.summarizer is None:
        return _error(503, "summarizer_unavailable", "no Gemini API key configured")

    result = await VideoSummaryUseCase(state.summarizer).summarize(body.locator)
    if isinstance(result, SummarySuccess):
        return JSONResponse(content={"summary": result.text})

    detail = getattr(result, "message", "")
    log.warning("summary_request_failed", locator=body.locator, error=detail)
    return _error(502, "summary_failed", detail)
