from __future__ import annotations

import logging
from typing import Iterable

from gi.repository import GLib, GObject

from packet_lens.capture.config import RuntimeConfig, load_runtime_config
from packet_lens.core.formatting import Formatters
from packet_lens.core.models import PacketSummary, Statistics
from packet_lens.core.services import CaptureService
from packet_lens.state.debounce import Debouncer
from packet_lens.state.pipeline import DerivationPipeline
from packet_lens.state.selection import PacketSelection
from packet_lens.state.stream_buffer import StreamBuffer

logger = logging.getLogger(__name__)

PUMP_BATCH_LIMIT = 100


class CaptureSession(GObject.Object):
    """View model for one capture session.

    Owns the packet buffer, the debounced display filter, the derived
    views, the selection and the formatting caches, so that independent
    sessions share nothing.  Capture-control calls are passed through to
    the service; their failures are logged and exposed as
    :attr:`capture_error` instead of being raised.
    """

    __gsignals__ = {
        "capture-error": (GObject.SignalFlags.RUN_LAST, None, (str,)),
        "capture-state-changed": (GObject.SignalFlags.RUN_LAST, None, ()),
        "interfaces-changed": (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self, service: CaptureService, config: RuntimeConfig | None = None) -> None:
        super().__init__()
        self._config = config or load_runtime_config()
        self._service = service
        self.buffer = StreamBuffer(self._config.buffer_capacity)
        self.pipeline = DerivationPipeline(self.buffer)
        self.selection = PacketSelection(service)
        self.formatters = Formatters(self._config.format_cache_size)
        self._filter_text = ""
        self._debouncer: Debouncer[str] = Debouncer(
            self._config.filter_debounce_ms, self.pipeline.on_filter_settled
        )
        self._pump_scheduled = False
        self._closed = False

        self.interfaces: list[str] = []
        self.selected_interface: str | None = None
        self.is_capturing = False
        self.capture_error: str | None = None

        service.set_batch_notify(self.schedule_pump)
        logger.debug("session created: %s", self._config.to_log_string())

    # -- derived views -----------------------------------------------------

    @property
    def filtered(self) -> tuple[PacketSummary, ...]:
        return self.pipeline.filtered

    @property
    def statistics(self) -> Statistics:
        return self.pipeline.statistics

    # -- display filter ----------------------------------------------------

    @property
    def filter_text(self) -> str:
        """The filter text as typed, which may not have settled yet."""
        return self._filter_text

    def set_filter_text(self, text: str) -> None:
        if self._closed:
            return
        self._filter_text = text
        self._debouncer.push(text)

    def apply_filter_now(self) -> None:
        """Apply the typed filter without waiting for it to settle."""
        self._debouncer.flush()

    # -- ingest ------------------------------------------------------------

    def schedule_pump(self) -> None:
        """Thread-safe: schedule a pump on the main thread via GLib.idle_add."""
        if self._pump_scheduled or self._closed:
            return
        self._pump_scheduled = True
        GLib.idle_add(self._do_pump)

    def _do_pump(self) -> bool:
        self._pump_scheduled = False
        if self._drain(PUMP_BATCH_LIMIT)[0] == PUMP_BATCH_LIMIT:
            # more may be queued; yield to the loop, then continue
            self.schedule_pump()
        return False  # One-shot idle

    def pump(self, limit: int = PUMP_BATCH_LIMIT) -> int:
        """Drain up to *limit* queued batches into the buffer; returns the packet count."""
        return self._drain(limit)[1]

    def _drain(self, limit: int) -> tuple[int, int]:
        if self._closed:
            return 0, 0
        batches = self._service.poll_batches(limit=limit)
        received = 0
        for batch in batches:
            self.buffer.append(batch)
            received += len(batch)
        return len(batches), received

    def ingest(self, batch: Iterable[PacketSummary]) -> None:
        self.buffer.append(batch)

    def clear(self) -> None:
        """Drop all packets and the current selection."""
        self.selection.clear()
        self.buffer.reset()

    # -- capture control ---------------------------------------------------

    def refresh_interfaces(self) -> list[str]:
        try:
            self.interfaces = list(self._service.list_interfaces())
        except (OSError, RuntimeError) as exc:
            self._set_error(f"Failed to list interfaces: {exc}")
            return self.interfaces
        if self.selected_interface not in self.interfaces:
            self.selected_interface = self.interfaces[0] if self.interfaces else None
        self.emit("interfaces-changed")
        return self.interfaces

    def start_capture(self, interface: str | None = None) -> bool:
        interface = interface or self.selected_interface
        if not interface:
            self._set_error("No interface selected")
            return False
        self.clear()
        self.clear_error()
        try:
            self._service.start_capture(interface)
        except (OSError, RuntimeError, ValueError) as exc:
            self._set_error(f"Failed to start capture on {interface}: {exc}")
            return False
        self.selected_interface = interface
        self.is_capturing = True
        logger.info("capture started on %s", interface)
        self.emit("capture-state-changed")
        return True

    def stop_capture(self) -> bool:
        if not self.is_capturing:
            return True
        try:
            self._service.stop_capture()
        except (OSError, RuntimeError) as exc:
            self._set_error(f"Failed to stop capture: {exc}")
            return False
        self.is_capturing = False
        # Drain whatever was queued before the stop took effect
        self.pump(limit=10_000)
        logger.info("capture stopped")
        self.emit("capture-state-changed")
        return True

    def export_packets(self, path: str, packet_ids: Iterable[int] | None = None) -> int | None:
        """Export *packet_ids* (default: the filtered view) to *path*."""
        ids = [p.id for p in self.filtered] if packet_ids is None else list(packet_ids)
        if not ids:
            self._set_error("No packets to export")
            return None
        try:
            written = self._service.export_packets(ids, path)
        except (OSError, RuntimeError, ValueError) as exc:
            self._set_error(f"Failed to export packets: {exc}")
            return None
        logger.info("exported %d packets to %s", written, path)
        return written

    def clear_error(self) -> None:
        self.capture_error = None

    def _set_error(self, message: str) -> None:
        logger.warning(message)
        self.capture_error = message
        self.emit("capture-error", message)

    # -- teardown ----------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Cancel pending timers and detach from the service."""
        if self._closed:
            return
        if self.is_capturing:
            self.stop_capture()
        self._closed = True
        self._debouncer.cancel()
        self._service.set_batch_notify(_noop)
        self.pipeline.detach()
        self.selection.clear()
        self.formatters.clear()


def _noop() -> None:
    pass
