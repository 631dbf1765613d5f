"""Type definitions for packet_lens.

Records cross the capture-engine boundary as plain dicts; these TypedDicts
document their shape without adding a runtime dependency on the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, NotRequired, TypedDict

if TYPE_CHECKING:
    from packet_lens.core.models import PacketDetail


class PacketSummaryDict(TypedDict):
    id: int
    timestamp: NotRequired[int]
    source_addr: NotRequired[str]
    dest_addr: NotRequired[str]
    protocol: NotRequired[str]
    length: NotRequired[int]
    info: NotRequired[str]


class ProtocolLayerDict(TypedDict):
    name: str
    fields: NotRequired[list[tuple[str, str]]]


class PacketDetailDict(TypedDict):
    summary: PacketSummaryDict
    layers: NotRequired[list[ProtocolLayerDict]]
    raw_bytes: NotRequired[Any]


# Called by the capture service whenever new batches are queued.
BatchNotifyCallback = Callable[[], None]

# Completion callback for a detail request: exactly one of detail/error is set.
DetailCallback = Callable[["PacketDetail | None", "Exception | None"], None]
