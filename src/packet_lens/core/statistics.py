"""Aggregate statistics over a packet collection."""

from __future__ import annotations

from typing import Sequence

from packet_lens.core.models import PacketSummary, ProtocolStats, Statistics, TalkerStats

TOP_TALKERS = 10

EMPTY_STATISTICS = Statistics()


def compute_statistics(packets: Sequence[PacketSummary]) -> Statistics:
    """Recompute statistics for *packets* from scratch.

    Groups keep first-seen order and the sorts are stable, so entries with
    equal counts are ordered by when their key first appeared.
    """
    total_packets = len(packets)
    if total_packets == 0:
        return EMPTY_STATISTICS

    protocol_counts: dict[str, list[int]] = {}  # protocol -> [count, bytes]
    source_counts: dict[str, int] = {}
    dest_counts: dict[str, int] = {}
    total_bytes = 0

    for packet in packets:
        entry = protocol_counts.get(packet.protocol)
        if entry is None:
            entry = protocol_counts[packet.protocol] = [0, 0]
        entry[0] += 1
        entry[1] += packet.length
        source_counts[packet.source_addr] = source_counts.get(packet.source_addr, 0) + 1
        dest_counts[packet.dest_addr] = dest_counts.get(packet.dest_addr, 0) + 1
        total_bytes += packet.length

    protocols = sorted(
        (
            ProtocolStats(
                protocol=protocol,
                count=count,
                percentage=count / total_packets * 100,
                total_bytes=byte_total,
            )
            for protocol, (count, byte_total) in protocol_counts.items()
        ),
        key=lambda stats: stats.count,
        reverse=True,
    )

    return Statistics(
        total_packets=total_packets,
        total_bytes=total_bytes,
        protocols=tuple(protocols),
        top_sources=_top_talkers(source_counts),
        top_destinations=_top_talkers(dest_counts),
        average_packet_size=total_bytes / total_packets,
    )


def _top_talkers(counts: dict[str, int], limit: int = TOP_TALKERS) -> tuple[TalkerStats, ...]:
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(TalkerStats(address=address, count=count) for address, count in ranked[:limit])
