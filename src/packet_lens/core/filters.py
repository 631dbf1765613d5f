"""Display-filter parsing and evaluation.

Queries are case-insensitive and trimmed before use:

    protocol:<v>   protocol contains v
    ip:<v>         source or destination address contains v
    port:<v>       info text contains v
    src:<v>        source address contains v
    dst:<v>        destination address contains v
    <text>         any of protocol, addresses, info or length contains text

A prefixed query with nothing after the prefix matches no packet; an empty
query matches every packet.  Evaluation is pure, so packets can be filtered
in any order or in parallel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from packet_lens.core.enums import PREFIXED_KINDS, FilterKind
from packet_lens.core.models import PacketSummary


@dataclass(slots=True, frozen=True)
class FilterQuery:
    kind: FilterKind
    value: str = ""

    def matches(self, packet: PacketSummary) -> bool:
        kind, value = self.kind, self.value
        if kind is FilterKind.ALL:
            return True
        if kind is FilterKind.SEARCH:
            return (
                value in packet.protocol.lower()
                or value in packet.source_addr.lower()
                or value in packet.dest_addr.lower()
                or value in packet.info.lower()
                or value in str(packet.length)
            )
        if not value:
            return False
        if kind is FilterKind.PROTOCOL:
            return value in packet.protocol.lower()
        # ip and port compare against the raw strings, not lowercased ones
        if kind is FilterKind.IP:
            return value in packet.source_addr or value in packet.dest_addr
        if kind is FilterKind.PORT:
            return value in packet.info
        if kind is FilterKind.SRC:
            return value in packet.source_addr.lower()
        return value in packet.dest_addr.lower()


MATCH_ALL = FilterQuery(FilterKind.ALL)


def parse_query(text: str | None) -> FilterQuery:
    """Parse display-filter text into a :class:`FilterQuery`.

    Only the leading prefix token is stripped, so values may themselves
    contain colons (``ip:fe80::1``).
    """
    query = (text or "").strip().lower()
    if not query:
        return MATCH_ALL
    for kind in PREFIXED_KINDS:
        if query.startswith(kind.prefix):
            return FilterQuery(kind, query[len(kind.prefix) :].strip())
    return FilterQuery(FilterKind.SEARCH, query)


def evaluate(packet: PacketSummary, query: str | FilterQuery) -> bool:
    if not isinstance(query, FilterQuery):
        query = parse_query(query)
    return query.matches(packet)


def filter_packets(
    packets: Iterable[PacketSummary], query: str | FilterQuery
) -> list[PacketSummary]:
    """Return the packets matching *query*, preserving input order."""
    if not isinstance(query, FilterQuery):
        query = parse_query(query)
    if query.kind is FilterKind.ALL:
        return list(packets)
    return [packet for packet in packets if query.matches(packet)]
