from __future__ import annotations

import logging

from gi.repository import GObject

from packet_lens.core.filters import FilterQuery, filter_packets, parse_query
from packet_lens.core.models import PacketSummary, Statistics
from packet_lens.core.statistics import compute_statistics
from packet_lens.state.stream_buffer import StreamBuffer

logger = logging.getLogger(__name__)


class DerivationPipeline(GObject.Object):
    """Filtered and statistics views derived from a :class:`StreamBuffer`.

    Dependencies are explicit: statistics depend only on the buffer, the
    filtered view on the buffer and the settled filter text.  A trigger
    only invalidates the affected view and emits its signal; the view is
    recomputed from scratch on the next read and cached until the next
    trigger.
    """

    __gsignals__ = {
        "filtered-changed": (GObject.SignalFlags.RUN_LAST, None, ()),
        "statistics-changed": (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self, buffer: StreamBuffer, filter_text: str = "") -> None:
        super().__init__()
        self._buffer = buffer
        self._filter_text = filter_text
        self._query = parse_query(filter_text)
        self._filtered: tuple[PacketSummary, ...] | None = None
        self._statistics: Statistics | None = None
        self.filter_recomputations = 0
        self.statistics_recomputations = 0
        self._handler_id: int | None = buffer.connect("changed", self._on_buffer_signal)

    @property
    def filter_text(self) -> str:
        """The settled filter text currently applied."""
        return self._filter_text

    @property
    def query(self) -> FilterQuery:
        return self._query

    @property
    def filtered(self) -> tuple[PacketSummary, ...]:
        if self._filtered is None:
            snapshot = self._buffer.snapshot()
            self._filtered = tuple(filter_packets(snapshot, self._query))
            self.filter_recomputations += 1
        return self._filtered

    @property
    def statistics(self) -> Statistics:
        if self._statistics is None:
            self._statistics = compute_statistics(self._buffer.snapshot())
            self.statistics_recomputations += 1
        return self._statistics

    def on_buffer_changed(self) -> None:
        self._filtered = None
        self._statistics = None
        self.emit("statistics-changed")
        self.emit("filtered-changed")

    def on_filter_settled(self, text: str) -> None:
        query = parse_query(text)
        self._filter_text = text
        if query == self._query:
            return
        logger.debug("filter settled: %r -> %s", text, query.kind)
        self._query = query
        self._filtered = None
        self.emit("filtered-changed")

    def detach(self) -> None:
        """Stop following the buffer; views keep their last values."""
        if self._handler_id is not None:
            self._buffer.disconnect(self._handler_id)
            self._handler_id = None

    def _on_buffer_signal(self, _buffer: StreamBuffer) -> None:
        self.on_buffer_changed()
