from __future__ import annotations

from typing import Callable, Generic, TypeVar

from gi.repository import GLib

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Deliver only the value that stays unchanged for *delay_ms*.

    Each :meth:`push` cancels the pending GLib timeout and starts a new one,
    so a burst of pushes produces a single callback with the last value.
    """

    def __init__(self, delay_ms: int, callback: Callable[[T], None]) -> None:
        self._delay_ms = delay_ms
        self._callback = callback
        self._source_id: int | None = None
        self._pending: T | None = None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def is_pending(self) -> bool:
        return self._source_id is not None

    def push(self, value: T) -> None:
        self._cancel_timer()
        self._pending = value
        self._source_id = GLib.timeout_add(self._delay_ms, self._on_timeout)

    def flush(self) -> None:
        """Deliver a pending value now instead of waiting for the timeout."""
        if self._source_id is None:
            return
        self._cancel_timer()
        self._deliver()

    def cancel(self) -> None:
        """Drop any pending value without delivering it."""
        self._cancel_timer()
        self._pending = None

    def _cancel_timer(self) -> None:
        if self._source_id is not None:
            GLib.source_remove(self._source_id)
            self._source_id = None

    def _on_timeout(self) -> bool:
        self._source_id = None
        self._deliver()
        return False  # One-shot timeout

    def _deliver(self) -> None:
        value = self._pending
        self._pending = None
        self._callback(value)  # type: ignore[arg-type]
