"""Summary output states published by the video-summary use case."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SummaryInitial:
    pass


@dataclass(frozen=True)
class SummaryLoading:
    pass


@dataclass(frozen=True)
class SummarySuccess:
    text: str


@dataclass(frozen=True)
class SummaryError:
    message: str


OutputTextState = Union[SummaryInitial, SummaryLoading, SummarySuccess, SummaryError]
