"""Mock capture engine for testing and development."""

from __future__ import annotations

import json
import logging
import queue
import random
import time
from typing import Iterable

from gi.repository import GLib

from packet_lens.capture.config import RuntimeConfig, load_runtime_config
from packet_lens.core.models import PacketDetail, PacketSummary
from packet_lens.core.services import CaptureService
from packet_lens.core.types import BatchNotifyCallback, DetailCallback

from .data import MOCK_INTERFACES, build_mock_detail, make_mock_packet, make_mock_raw_bytes

logger = logging.getLogger(__name__)

# Raw frames kept for detail lookups, like the engine's own packet cache.
MAX_CACHED_FRAMES = 100_000


class MockCaptureClient(CaptureService):
    """Generates synthetic packets on the GLib main loop.

    With ``hold_details`` enabled, detail responses are parked until
    :meth:`release_details` is called, which lets tests control the order
    in which asynchronous responses arrive.
    """

    def __init__(self, config: RuntimeConfig | None = None, *, seed: int = 42) -> None:
        self._config = config or load_runtime_config()
        self._rng = random.Random(seed)
        self._next_id = 1
        self._batches: queue.Queue[list[PacketSummary]] = queue.Queue()
        self._batch_notify: BatchNotifyCallback | None = None
        self._frames: dict[int, tuple[PacketSummary, bytes]] = {}
        self._held: list[tuple[int, DetailCallback, PacketDetail | None, Exception | None]] = []
        self._tick_source_id: int | None = None
        self.hold_details = self._config.hold_details
        self.interface: str | None = None
        self.fail_next_start: Exception | None = None
        self.exported: list[int] = []

    # -- batches -----------------------------------------------------------

    def set_batch_notify(self, notify_fn: BatchNotifyCallback) -> None:
        self._batch_notify = notify_fn

    def queue_batch(self, batch: Iterable[PacketSummary]) -> None:
        """Queue an explicit batch, as the engine would after decoding."""
        items = list(batch)
        for packet in items:
            self._remember(packet, make_mock_raw_bytes(packet, self._rng))
            self._next_id = max(self._next_id, packet.id + 1)
        self._batches.put_nowait(items)
        self._emit_notify()

    def generate_batch(self, size: int | None = None) -> list[PacketSummary]:
        size = self._config.mock_batch_size if size is None else size
        now = time.time_ns()
        batch = []
        for offset in range(size):
            batch.append(make_mock_packet(self._next_id + offset, self._rng, now + offset * 1000))
        self.queue_batch(batch)
        return batch

    def poll_batches(self, limit: int = 100) -> list[list[PacketSummary]]:
        batches: list[list[PacketSummary]] = []
        while len(batches) < limit:
            try:
                batches.append(self._batches.get_nowait())
            except queue.Empty:
                break
        return batches

    def _remember(self, packet: PacketSummary, raw: bytes) -> None:
        self._frames[packet.id] = (packet, raw)
        while len(self._frames) > MAX_CACHED_FRAMES:
            del self._frames[next(iter(self._frames))]

    def _emit_notify(self) -> None:
        if self._batch_notify is not None:
            try:
                self._batch_notify()
            except Exception:  # noqa: BLE001
                logger.exception("batch notify callback failed")

    # -- detail ------------------------------------------------------------

    def request_packet_detail(self, packet_id: int, on_done: DetailCallback) -> None:
        frame = self._frames.get(packet_id)
        if frame is None:
            detail, error = None, LookupError(f"packet {packet_id} not found")
        else:
            detail, error = build_mock_detail(*frame), None
        if self.hold_details:
            self._held.append((packet_id, on_done, detail, error))
            return
        GLib.idle_add(_deliver_once, on_done, detail, error)

    def release_details(self, packet_id: int | None = None) -> int:
        """Deliver held responses (all, or only those for *packet_id*)."""
        if packet_id is None:
            ready, self._held = self._held, []
        else:
            ready = [item for item in self._held if item[0] == packet_id]
            self._held = [item for item in self._held if item[0] != packet_id]
        for _packet_id, on_done, detail, error in ready:
            on_done(detail, error)
        return len(ready)

    # -- capture control ---------------------------------------------------

    def list_interfaces(self) -> list[str]:
        return list(MOCK_INTERFACES)

    def start_capture(self, interface: str) -> None:
        if self.fail_next_start is not None:
            exc, self.fail_next_start = self.fail_next_start, None
            raise exc
        if interface not in MOCK_INTERFACES:
            raise OSError(f"no such device: {interface}")
        if self._tick_source_id is not None:
            raise RuntimeError("capture already running")
        self.interface = interface
        self._tick_source_id = GLib.timeout_add(self._config.mock_interval_ms, self._on_tick)
        logger.debug("mock capture started on %s", interface)

    def stop_capture(self) -> None:
        if self._tick_source_id is None:
            raise RuntimeError("no capture running")
        GLib.source_remove(self._tick_source_id)
        self._tick_source_id = None
        self.interface = None

    def _on_tick(self) -> bool:
        self.generate_batch()
        return True

    def export_packets(self, packet_ids: Iterable[int], path: str) -> int:
        written = 0
        with open(path, "w", encoding="utf-8") as out:
            for packet_id in packet_ids:
                frame = self._frames.get(packet_id)
                if frame is None:
                    continue
                summary, raw = frame
                record = {"id": summary.id, "timestamp": summary.timestamp, "raw": raw.hex()}
                out.write(json.dumps(record) + "\n")
                self.exported.append(packet_id)
                written += 1
        return written

    def close(self) -> None:
        if self._tick_source_id is not None:
            GLib.source_remove(self._tick_source_id)
            self._tick_source_id = None
        self._held.clear()


def _deliver_once(
    on_done: DetailCallback, detail: PacketDetail | None, error: Exception | None
) -> bool:
    on_done(detail, error)
    return False  # One-shot idle
