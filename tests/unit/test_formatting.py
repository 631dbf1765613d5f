from datetime import datetime, timezone

from packet_lens.core.formatting import (
    INVALID_ASCII,
    INVALID_HEX,
    Formatters,
    format_ascii_byte,
    format_hex_byte,
)
from packet_lens.core.time import INVALID_TIMESTAMP, format_timestamp, to_local


def test_format_timestamp_renders_local_time_with_millis() -> None:
    moment = datetime(2024, 3, 1, 12, 30, 45, 123_000, tzinfo=timezone.utc)
    nanos = int(moment.timestamp()) * 1_000_000_000 + 123_456_789
    local = to_local(moment)
    assert format_timestamp(nanos) == f"{local:%H:%M:%S}.123"


def test_format_timestamp_invalid_values_use_sentinel() -> None:
    for value in (0, -5, float("nan"), 10**40, "bogus"):
        assert format_timestamp(value) == INVALID_TIMESTAMP  # type: ignore[arg-type]


def test_hex_and_ascii_bytes() -> None:
    assert format_hex_byte(0) == "00"
    assert format_hex_byte(0xAB) == "ab"
    assert format_hex_byte(256) == INVALID_HEX
    assert format_hex_byte(-1) == INVALID_HEX
    assert format_ascii_byte(ord("A")) == "A"
    assert format_ascii_byte(0x0A) == INVALID_ASCII
    assert format_ascii_byte(0x7F) == INVALID_ASCII
    assert format_ascii_byte(300) == INVALID_ASCII


def test_hex_dump_rows() -> None:
    formatters = Formatters()
    data = b"GET / HTTP/1.1\r\nHost"
    rows = formatters.hex_dump_rows(data)

    assert len(rows) == 2
    assert rows[0].offset == "0000"
    assert rows[0].hex.split() == [f"{b:02x}" for b in data[:16]]
    assert rows[0].ascii == "GET / HTTP/1.1.."
    assert rows[1].offset == "0010"
    assert rows[1].ascii == "Host"


def test_hex_dump_tolerates_out_of_range_values() -> None:
    rows = Formatters().hex_dump_rows((0x41, 999, -3))
    assert rows[0].hex == "41 00 00"
    assert rows[0].ascii == "A.."


def test_formatters_are_independent_per_instance() -> None:
    first, second = Formatters(max_entries=8), Formatters(max_entries=8)
    first.timestamp(1_700_000_000_000_000_000)
    assert len(first.timestamps) == 1
    assert len(second.timestamps) == 0
