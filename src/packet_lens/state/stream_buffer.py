from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from gi.repository import GObject

from packet_lens.capture.config import DEFAULT_BUFFER_CAPACITY
from packet_lens.core.models import PacketSummary

logger = logging.getLogger(__name__)

MAX_PACKETS = DEFAULT_BUFFER_CAPACITY


class StreamBuffer(GObject.Object):
    """Bounded, arrival-ordered set of the most recent packet summaries.

    When an append would exceed capacity the oldest packets are dropped
    first.  Every content change emits ``changed`` after the mutation is
    complete, so handlers always see whole batches.
    """

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self, capacity: int = MAX_PACKETS) -> None:
        super().__init__()
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._packets: deque[PacketSummary] = deque(maxlen=capacity)
        self._snapshot: tuple[PacketSummary, ...] | None = ()
        self._version = 0
        self.evicted_total = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def version(self) -> int:
        """Incremented on every content change."""
        return self._version

    def append(self, batch: Iterable[PacketSummary]) -> None:
        items = list(batch)
        if not items:
            return
        overflow = len(self._packets) + len(items) - self._capacity
        if len(items) >= self._capacity:
            self._packets.clear()
            items = items[-self._capacity :]
        # deque(maxlen) discards from the left as the batch is extended in
        self._packets.extend(items)
        if overflow > 0:
            self.evicted_total += overflow
            logger.debug("buffer full: dropped %d oldest packets", overflow)
        self._changed()

    def replace(self, packets: Iterable[PacketSummary]) -> None:
        items = list(packets)
        if not items and not self._packets:
            return
        self._packets.clear()
        self._packets.extend(items[-self._capacity :])
        self._changed()

    def reset(self) -> None:
        self.replace(())

    def snapshot(self) -> tuple[PacketSummary, ...]:
        """Return the current contents, oldest first.

        The tuple is built lazily on the first read after a change, which
        costs O(n) once; every later read until the next change returns the
        same object in O(1).  Appends never copy the buffer, so a stream of
        small batches stays O(batch) per append.
        """
        if self._snapshot is None:
            self._snapshot = tuple(self._packets)
        return self._snapshot

    def _changed(self) -> None:
        self._snapshot = None
        self._version += 1
        self.emit("changed")

    def __len__(self) -> int:
        return len(self._packets)
