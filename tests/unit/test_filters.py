from packet_lens.core.enums import FilterKind
from packet_lens.core.filters import evaluate, filter_packets, parse_query
from packet_lens.core.models import PacketSummary


def _packet(
    packet_id: int = 1,
    protocol: str = "TCP",
    src: str = "192.168.1.1",
    dst: str = "192.168.1.2",
    info: str = "test",
    length: int = 100,
) -> PacketSummary:
    return PacketSummary(
        id=packet_id,
        timestamp=1_000_000_000,
        source_addr=src,
        dest_addr=dst,
        protocol=protocol,
        length=length,
        info=info,
    )


def test_protocol_filter_is_case_insensitive() -> None:
    packet = _packet()
    assert evaluate(packet, "protocol:tcp")
    assert evaluate(packet, "protocol:TCP")
    assert evaluate(packet, "PROTOCOL:tc")
    assert not evaluate(packet, "protocol:udp")


def test_ip_filter_matches_source_or_destination() -> None:
    packet = _packet()
    assert evaluate(packet, "ip:192.168.1.1")
    assert evaluate(packet, "ip:192.168.1.2")
    assert not evaluate(packet, "ip:10.0.0.1")


def test_ip_filter_keeps_colons_in_value() -> None:
    packet = _packet(src="fe80::1", dst="ff02::fb")
    assert evaluate(packet, "ip:fe80::1")
    assert evaluate(packet, "ip:ff02::")
    assert not evaluate(packet, "ip:fe80::2")


def test_ip_filter_compares_against_raw_address() -> None:
    packet = _packet(src="FE80::1")
    # the query is lowercased but the address is not
    assert not evaluate(packet, "ip:FE80::1")


def test_port_filter_searches_info() -> None:
    packet = _packet(info="80")
    assert evaluate(packet, "port:80")
    assert not evaluate(packet, "port:443")


def test_src_and_dst_filters() -> None:
    packet = _packet()
    assert evaluate(packet, "src:192.168.1.1")
    assert not evaluate(packet, "src:10.0.0.1")
    assert evaluate(packet, "dst:192.168.1.2")
    assert not evaluate(packet, "dst:10.0.0.1")
    assert not evaluate(packet, "src:192.168.1.2")


def test_prefix_with_empty_value_matches_nothing() -> None:
    packet = _packet()
    for query in ("protocol:", "ip:", "port:", "src:", "dst:", "protocol:   "):
        assert not evaluate(packet, query), query


def test_empty_or_whitespace_query_matches_everything() -> None:
    packet = _packet()
    for query in ("", "   ", "\t", None):
        assert evaluate(packet, query)


def test_general_search_covers_all_text_fields_and_length() -> None:
    packet = _packet(info="HTTP GET", length=1514)
    assert evaluate(packet, "tcp")
    assert evaluate(packet, "192.168")
    assert evaluate(packet, "http")
    assert evaluate(packet, "GET")
    assert evaluate(packet, "151")
    assert not evaluate(packet, "UDP")
    assert not evaluate(packet, "10.0.0.1")


def test_general_search_ignores_timestamp() -> None:
    packet = _packet()
    assert not evaluate(packet, "1000000000")


def test_query_is_trimmed_before_prefix_detection() -> None:
    packet = _packet()
    assert evaluate(packet, "  protocol: tcp  ")
    assert parse_query("  src:10.0.0.1 ").kind is FilterKind.SRC


def test_parse_query_kinds() -> None:
    assert parse_query("").kind is FilterKind.ALL
    assert parse_query("protocol:udp").kind is FilterKind.PROTOCOL
    assert parse_query("ip:fe80::1").value == "fe80::1"
    assert parse_query("port:53").kind is FilterKind.PORT
    assert parse_query("dst:10.0.0.1").kind is FilterKind.DST
    search = parse_query("Foo:Bar")
    assert search.kind is FilterKind.SEARCH
    assert search.value == "foo:bar"


def test_evaluate_is_repeatable() -> None:
    packet = _packet()
    results = {evaluate(packet, "ip:192.168") for _ in range(5)}
    assert results == {True}


def test_filter_packets_preserves_order() -> None:
    packets = [
        _packet(1, "TCP", "192.168.1.1", "192.168.1.2", "80"),
        _packet(2, "UDP", "192.168.1.1", "192.168.1.3", "53"),
        _packet(3, "TCP", "192.168.1.2", "192.168.1.1", "443"),
    ]

    assert len(filter_packets(packets, "")) == 3
    assert [p.id for p in filter_packets(packets, "protocol:tcp")] == [1, 3]
    assert [p.id for p in filter_packets(packets, "ip:192.168.1.1")] == [1, 2, 3]
    assert [p.id for p in filter_packets(packets, "src:192.168.1.1")] == [1, 2]
    assert [p.id for p in filter_packets(packets, "port:80")] == [1]
    assert [p.id for p in filter_packets(packets, "TCP")] == [1, 3]


def test_filter_by_source_address_scenario() -> None:
    packets = [
        _packet(1, src="192.168.1.1", dst="10.0.0.1"),
        _packet(2, src="192.168.1.1", dst="10.0.0.2"),
        _packet(3, src="192.168.1.2", dst="10.0.0.3"),
    ]
    assert [p.id for p in filter_packets(packets, "ip:192.168.1.1")] == [1, 2]
