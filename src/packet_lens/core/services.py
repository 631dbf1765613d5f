from __future__ import annotations

from typing import Iterable, Protocol

from packet_lens.core.models import PacketSummary
from packet_lens.core.types import BatchNotifyCallback, DetailCallback


class CaptureService(Protocol):
    """Boundary to the capture engine.

    The engine decodes packets and pushes batches of summaries; the live
    view only drains them. Capture-control calls may raise ``OSError``,
    ``RuntimeError`` or ``ValueError``.
    """

    def set_batch_notify(self, notify_fn: BatchNotifyCallback) -> None:
        """Register a callback invoked (from any thread) when batches are queued."""
        ...

    def poll_batches(self, limit: int = 100) -> list[list[PacketSummary]]:
        """Drain up to *limit* queued batches, oldest first."""
        ...

    def request_packet_detail(self, packet_id: int, on_done: DetailCallback) -> None:
        """Fetch the detail record for *packet_id* asynchronously.

        *on_done* is called once on the main loop with either a
        ``PacketDetail`` or an exception (``LookupError`` for unknown ids).
        """
        ...

    def list_interfaces(self) -> list[str]: ...

    def start_capture(self, interface: str) -> None: ...

    def stop_capture(self) -> None: ...

    def export_packets(self, packet_ids: Iterable[int], path: str) -> int:
        """Write the given packets to *path*; returns the number written."""
        ...

    def close(self) -> None: ...
