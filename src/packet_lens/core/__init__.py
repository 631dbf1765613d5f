from .enums import FilterKind
from .filters import FilterQuery, evaluate, filter_packets, parse_query
from .format_cache import FormatCache
from .formatting import Formatters, HexRow, format_ascii_byte, format_hex_byte
from .models import (
    PacketDetail,
    PacketSummary,
    ProtocolLayer,
    ProtocolStats,
    Statistics,
    TalkerStats,
)
from .services import CaptureService
from .statistics import compute_statistics
from .time import format_timestamp

__all__ = [
    "CaptureService",
    "FilterKind",
    "FilterQuery",
    "FormatCache",
    "Formatters",
    "HexRow",
    "PacketDetail",
    "PacketSummary",
    "ProtocolLayer",
    "ProtocolStats",
    "Statistics",
    "TalkerStats",
    "compute_statistics",
    "evaluate",
    "filter_packets",
    "format_ascii_byte",
    "format_hex_byte",
    "format_timestamp",
    "parse_query",
]
