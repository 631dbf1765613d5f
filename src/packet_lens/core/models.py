from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from packet_lens.core.types import PacketDetailDict, PacketSummaryDict


@dataclass(slots=True, frozen=True)
class PacketSummary:
    id: int
    timestamp: int  # Unix nanoseconds, 0 when the producer had none
    source_addr: str
    dest_addr: str
    protocol: str
    length: int
    info: str = ""

    @classmethod
    def from_dict(cls, data: PacketSummaryDict) -> PacketSummary:
        return cls(
            id=int(data["id"]),
            timestamp=int(data.get("timestamp") or 0),
            source_addr=str(data.get("source_addr", "")),
            dest_addr=str(data.get("dest_addr", "")),
            protocol=str(data.get("protocol", "")),
            length=int(data.get("length") or 0),
            info=str(data.get("info", "")),
        )


@dataclass(slots=True, frozen=True)
class ProtocolLayer:
    name: str
    fields: tuple[tuple[str, str], ...] = ()  # (field name, field value), outer to inner


@dataclass(slots=True, frozen=True)
class PacketDetail:
    summary: PacketSummary
    layers: tuple[ProtocolLayer, ...] = ()
    # bytes from a well-behaved producer; a tuple of ints when hydrated from
    # a dict, where out-of-range values are kept and rendered as a sentinel.
    raw_bytes: bytes | tuple[int, ...] = b""

    @classmethod
    def from_dict(cls, data: PacketDetailDict) -> PacketDetail:
        layers = tuple(
            ProtocolLayer(
                name=str(layer["name"]),
                fields=tuple((str(k), str(v)) for k, v in layer.get("fields", [])),
            )
            for layer in data.get("layers", [])
        )
        raw: Any = data.get("raw_bytes", b"")
        if isinstance(raw, (bytes, bytearray)):
            raw_bytes: bytes | tuple[int, ...] = bytes(raw)
        else:
            raw_bytes = tuple(int(b) for b in raw)
        return cls(
            summary=PacketSummary.from_dict(data["summary"]),
            layers=layers,
            raw_bytes=raw_bytes,
        )


@dataclass(slots=True, frozen=True)
class ProtocolStats:
    protocol: str
    count: int
    percentage: float
    total_bytes: int


@dataclass(slots=True, frozen=True)
class TalkerStats:
    address: str
    count: int


@dataclass(slots=True, frozen=True)
class Statistics:
    total_packets: int = 0
    total_bytes: int = 0
    protocols: tuple[ProtocolStats, ...] = field(default_factory=tuple)
    top_sources: tuple[TalkerStats, ...] = field(default_factory=tuple)
    top_destinations: tuple[TalkerStats, ...] = field(default_factory=tuple)
    average_packet_size: float = 0.0
