"""Cached formatters for the packet list and hex view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from packet_lens.core.format_cache import MAX_ENTRIES, FormatCache
from packet_lens.core.time import format_timestamp

INVALID_HEX = "00"
INVALID_ASCII = "."
HEX_ROW_WIDTH = 16


def format_hex_byte(value: object) -> str:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF:
        return f"{value:02x}"
    return INVALID_HEX


def format_ascii_byte(value: object) -> str:
    if isinstance(value, int) and not isinstance(value, bool) and 0x20 <= value < 0x7F:
        return chr(value)
    return INVALID_ASCII


@dataclass(slots=True, frozen=True)
class HexRow:
    offset: str
    hex: str
    ascii: str


class Formatters:
    """Per-session formatting caches.

    Owned by a :class:`~packet_lens.state.session.CaptureSession` so that
    separate sessions never share cached state.
    """

    def __init__(self, max_entries: int = MAX_ENTRIES) -> None:
        self.timestamps: FormatCache[int, str] = FormatCache(max_entries)
        self.hex_bytes: FormatCache[int, str] = FormatCache(max_entries)
        self.ascii_bytes: FormatCache[int, str] = FormatCache(max_entries)

    def timestamp(self, timestamp_ns: int) -> str:
        return self.timestamps.get_or_compute(timestamp_ns, format_timestamp)

    def hex_byte(self, value: int) -> str:
        return self.hex_bytes.get_or_compute(value, format_hex_byte)

    def ascii_byte(self, value: int) -> str:
        return self.ascii_bytes.get_or_compute(value, format_ascii_byte)

    def hex_dump_rows(self, raw_bytes: Iterable[int], width: int = HEX_ROW_WIDTH) -> list[HexRow]:
        """Split *raw_bytes* into offset/hex/ascii rows of *width* bytes."""
        data = list(raw_bytes)
        rows: list[HexRow] = []
        for start in range(0, len(data), width):
            chunk = data[start : start + width]
            rows.append(
                HexRow(
                    offset=f"{start:04x}",
                    hex=" ".join(self.hex_byte(b) for b in chunk),
                    ascii="".join(self.ascii_byte(b) for b in chunk),
                )
            )
        return rows

    def clear(self) -> None:
        self.timestamps.clear()
        self.hex_bytes.clear()
        self.ascii_bytes.clear()
