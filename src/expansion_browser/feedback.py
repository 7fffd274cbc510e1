"""Transient UI state: the latest toast and the "just copied" row marker.

Both are modeled as a value plus a cancellable clear timer. The scheduler is
injected so the TUI can pass ``App.set_timer`` and tests can pass a fake.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from expansion_browser.models import (
    COPY_MARKER_TIMEOUT,
    TOAST_KINDS,
    TOAST_TIMEOUT,
    RowKey,
    ToastMessage,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimerHandle(Protocol):
    """Anything with a ``stop()`` method (Textual's Timer qualifies)."""

    def stop(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class TimedValue(Generic[T]):
    """A value that clears itself after a delay.

    Setting a new value cancels the pending clear of the previous one.
    """

    def __init__(
        self,
        schedule: Scheduler,
        on_change: Callable[[T | None], None] | None = None,
    ) -> None:
        self._schedule = schedule
        self._on_change = on_change
        self._value: T | None = None
        self._timer: TimerHandle | None = None

    @property
    def value(self) -> T | None:
        return self._value

    def set(self, value: T, delay: float) -> None:
        """Store value and schedule it to clear after delay seconds."""
        self._cancel_timer()
        self._value = value
        self._timer = self._schedule(delay, lambda: self._expire(value))
        self._notify()

    def clear(self) -> None:
        """Clear the value immediately."""
        self._cancel_timer()
        if self._value is not None:
            self._value = None
            self._notify()

    def _expire(self, expected: T) -> None:
        # Only the timer belonging to the current value may clear it
        if self._value is not expected:
            return
        self._timer = None
        self._value = None
        self._notify()

    def _cancel_timer(self) -> None:
        # Atomic swap pattern: capture and clear before stopping
        old_timer = self._timer
        self._timer = None
        if old_timer is not None:
            old_timer.stop()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self._value)


class Notifier:
    """Holds the latest toast; each new message supersedes the previous one."""

    def __init__(
        self,
        schedule: Scheduler,
        timeout: float = TOAST_TIMEOUT,
        on_change: Callable[[ToastMessage | None], None] | None = None,
    ) -> None:
        self.timeout = timeout
        self._ids = itertools.count(1)
        self._toast: TimedValue[ToastMessage] = TimedValue(schedule, on_change)

    @property
    def current(self) -> ToastMessage | None:
        return self._toast.value

    def show(self, text: str, kind: str = "success") -> ToastMessage:
        """Publish a toast and schedule its expiry."""
        if kind not in TOAST_KINDS:
            raise ValueError(f"Unknown toast kind: {kind!r}")
        toast = ToastMessage(id=next(self._ids), text=text, kind=kind)
        logger.debug("Toast #%d (%s): %s", toast.id, kind, text)
        self._toast.set(toast, self.timeout)
        return toast

    def dismiss(self) -> None:
        self._toast.clear()


class CopyMarker:
    """Marks the row that was just copied, for a short time."""

    def __init__(
        self,
        schedule: Scheduler,
        timeout: float = COPY_MARKER_TIMEOUT,
        on_change: Callable[[RowKey | None], None] | None = None,
    ) -> None:
        self.timeout = timeout
        self._marker: TimedValue[RowKey] = TimedValue(schedule, on_change)

    @property
    def current(self) -> RowKey | None:
        return self._marker.value

    def mark(self, key: RowKey) -> None:
        self._marker.set(key, self.timeout)

    def is_marked(self, key: RowKey) -> bool:
        return self._marker.value == key

    def clear(self) -> None:
        self._marker.clear()


__all__ = [
    "CopyMarker",
    "Notifier",
    "Scheduler",
    "TimedValue",
    "TimerHandle",
]
