"""Summarization service adapters."""

from __future__ import annotations

from .gemini import GeminiSummarizer

__all__ = ["GeminiSummarizer"]
