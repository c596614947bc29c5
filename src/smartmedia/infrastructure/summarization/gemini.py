"""Gemini summarizer: google-genai async streaming client."""

from __future__ import annotations

from collections.abc import AsyncIterator

import structlog
from google import genai
from google.genai import types

log = structlog.get_logger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"


class GeminiSummarizer:
    """Summarizes a video locator with a Gemini model.

    Implements ``SummarizerPort``. The locator is passed as file data so
    the model reads the video itself, not a transcript.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        client: genai.Client | None = None,
    ) -> None:
        self._client = client or genai.Client(api_key=api_key)
        self._model = model

    async def summarize(self, locator: str, instruction: str) -> AsyncIterator[str]:
        contents = types.Content(
            role="user",
            parts=[
                types.Part(
                    file_data=types.FileData(file_uri=locator, mime_type="video/mp4")
                ),
                types.Part(text=instruction),
            ],
        )
        log.debug("gemini_summary_request", model=self._model, locator=locator)
        stream = await self._client.aio.models.generate_content_stream(
            model=self._model,
            contents=contents,
        )
        async for response in stream:
            if response.text:
                yield response.text
