"""Video summary use case: stream a generated summary into observable state."""

from __future__ import annotations

import structlog

from smartmedia.application.observable import ObservableValue
from smartmedia.domain.entities.summary import (
    OutputTextState,
    SummaryError,
    SummaryInitial,
    SummaryLoading,
    SummarySuccess,
)
from smartmedia.domain.ports.summarizer import SummarizerPort

log = structlog.get_logger(__name__)

SUMMARY_INSTRUCTION = (
    "Summarize this video in the form of top 3-4 takeaways only. "
    "Write in the form of bullet points. Don't assume if you don't know"
)

_UNKNOWN_ERROR = "An unknown error occurred"


class VideoSummaryUseCase:
    """Publishes ``OutputTextState`` for one summarization at a time."""

    def __init__(
        self,
        summarizer: SummarizerPort,
        *,
        instruction: str = SUMMARY_INSTRUCTION,
    ) -> None:
        self._summarizer = summarizer
        self._instruction = instruction
        self.output: ObservableValue[OutputTextState] = ObservableValue(
            SummaryInitial()
        )

    def clear(self) -> None:
        self.output.set(SummaryInitial())

    async def summarize(self, locator: str) -> OutputTextState:
        """Summarize the video at *locator* and return the final state."""
        self.clear()
        self.output.set(SummaryLoading())

        chunks: list[str] = []
        try:
            async for chunk in self._summarizer.summarize(locator, self._instruction):
                if chunk:
                    chunks.append(chunk)
        except Exception as exc:
            log.error("summary_failed", locator=locator, error=str(exc))
            self.output.set(SummaryError(message=str(exc) or _UNKNOWN_ERROR))
            return self.output.value

        log.info("summary_completed", locator=locator, chars=sum(map(len, chunks)))
        self.output.set(SummarySuccess(text="".join(chunks)))
        return self.output.value
