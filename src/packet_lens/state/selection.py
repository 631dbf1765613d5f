from __future__ import annotations

import logging

from gi.repository import GObject

from packet_lens.core.models import PacketDetail
from packet_lens.core.services import CaptureService

logger = logging.getLogger(__name__)


class PacketSelection(GObject.Object):
    """Currently selected packet and its lazily fetched detail record.

    Every selection change bumps a generation counter; a detail response
    carrying an older generation is dropped, so a slow reply can never
    overwrite a newer selection.  Fetch failures are logged and leave the
    displayed detail unchanged; ``detail-changed`` still fires so
    listeners see :attr:`loading` drop.
    """

    __gsignals__ = {
        "detail-changed": (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self, service: CaptureService) -> None:
        super().__init__()
        self._service = service
        self._generation = 0
        self._selected_id: int | None = None
        self._detail: PacketDetail | None = None
        self._loading = False

    @property
    def selected_id(self) -> int | None:
        return self._selected_id

    @property
    def detail(self) -> PacketDetail | None:
        return self._detail

    @property
    def loading(self) -> bool:
        return self._loading

    def select(self, packet_id: int | None) -> None:
        if packet_id == self._selected_id and (self._loading or self._detail is not None):
            return
        self._generation += 1
        generation = self._generation
        self._selected_id = packet_id
        self._detail = None
        self._loading = packet_id is not None
        self.emit("detail-changed")
        if packet_id is None:
            return

        def on_done(detail: PacketDetail | None, error: Exception | None) -> None:
            self._on_detail(generation, packet_id, detail, error)

        try:
            self._service.request_packet_detail(packet_id, on_done)
        except (OSError, RuntimeError, LookupError, ValueError) as exc:
            if generation != self._generation:
                return
            logger.warning("detail request for packet %d failed: %s", packet_id, exc)
            self._loading = False
            self.emit("detail-changed")

    def clear(self) -> None:
        self.select(None)

    def _on_detail(
        self,
        generation: int,
        packet_id: int,
        detail: PacketDetail | None,
        error: Exception | None,
    ) -> None:
        if generation != self._generation:
            logger.debug("discarding stale detail for packet %d", packet_id)
            return
        self._loading = False
        if error is not None or detail is None:
            logger.warning("detail fetch for packet %d failed: %s", packet_id, error)
            self.emit("detail-changed")
            return
        self._detail = detail
        self.emit("detail-changed")
