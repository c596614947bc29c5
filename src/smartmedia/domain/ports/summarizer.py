"""Port for the generative-AI summarization service."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class SummarizerPort(Protocol):
    """Summarizes a playable video locator into streamed text chunks."""

    def summarize(self, locator: str, instruction: str) -> AsyncIterator[str]:
        """Yield summary text chunks as they arrive."""
        ...
