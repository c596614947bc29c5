"""Single-writer value cell with synchronous change notification."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")

Subscriber = Callable[[T], None]


class ObservableValue(Generic[T]):
    """Holds the current value and notifies subscribers on every change.

    The owner writes via ``set()``; everyone else reads ``value`` or
    subscribes. Subscribers receive the current value immediately on
    subscription. A failing subscriber is logged and does not stop
    delivery to the others.

    Usage::

        cell = ObservableValue(PlaybackSurfaceState())
        unsubscribe = cell.subscribe(render)
        ...
        unsubscribe()
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Subscriber[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        for subscriber in list(self._subscribers):
            try:
                subscriber(value)
            except Exception:
                log.exception("observable_subscriber_failed")

    def subscribe(self, subscriber: Subscriber[T]) -> Callable[[], None]:
        """Register *subscriber* and return a callable that removes it."""
        self._subscribers.append(subscriber)
        try:
            subscriber(self._value)
        except Exception:
            log.exception("observable_subscriber_failed")

        def _unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return _unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
