"""Mock packet data and factory helpers for testing and development."""

from __future__ import annotations

import random
import struct

from packet_lens.core.models import PacketDetail, PacketSummary, ProtocolLayer

MOCK_INTERFACES: list[str] = ["lo", "eth0", "wlan0"]

# (address, mac)
MOCK_HOSTS: list[tuple[str, str]] = [
    ("192.168.1.1", "00:1a:2b:3c:4d:01"),  # gateway
    ("192.168.1.10", "00:1a:2b:3c:4d:0a"),
    ("192.168.1.23", "00:1a:2b:3c:4d:17"),
    ("192.168.1.42", "00:1a:2b:3c:4d:2a"),
    ("10.0.0.5", "02:42:ac:11:00:05"),
    ("93.184.216.34", "00:00:5e:00:53:01"),
    ("fe80::1", "33:33:00:00:00:01"),
]

# (protocol, weight, well-known ports)
MOCK_PROTOCOLS: list[tuple[str, int, tuple[int, ...]]] = [
    ("TCP", 50, (80, 443, 22, 8080)),
    ("UDP", 25, (53, 123, 5353)),
    ("ICMP", 10, ()),
    ("ARP", 8, ()),
    ("ICMPv6", 7, ()),
]

ETH_HEADER_LEN = 14


def make_mock_packet(packet_id: int, rng: random.Random, timestamp_ns: int) -> PacketSummary:
    protocol, _weight, ports = rng.choices(
        MOCK_PROTOCOLS, weights=[w for _, w, _ in MOCK_PROTOCOLS]
    )[0]
    src, dst = rng.sample(MOCK_HOSTS, 2)
    if protocol == "ARP":
        info = f"Who has {dst[0]}? Tell {src[0]}"
        length = 42
    elif ports:
        src_port = rng.randint(1024, 65535)
        dst_port = rng.choice(ports)
        info = f"{src_port} → {dst_port}"
        if protocol == "TCP":
            info += f" [{rng.choice(['SYN', 'ACK', 'PSH, ACK', 'FIN, ACK'])}]"
        length = rng.randint(54, 1514)
    else:
        info = rng.choice(["Echo (ping) request", "Echo (ping) reply"])
        length = 98
    return PacketSummary(
        id=packet_id,
        timestamp=timestamp_ns,
        source_addr=src[0],
        dest_addr=dst[0],
        protocol=protocol,
        length=length,
        info=info,
    )


def make_mock_raw_bytes(summary: PacketSummary, rng: random.Random) -> bytes:
    """Synthesize frame bytes of ``summary.length`` (header plus random payload)."""
    header = bytes.fromhex("001a2b3c4d01001a2b3c4d0a0800")
    header += struct.pack(
        "!BBHHHBBH",
        0x45,
        0,
        max(summary.length - ETH_HEADER_LEN, 0),
        summary.id & 0xFFFF,
        0x4000,
        64,
        6,
        0,
    )
    header += bytes(8)  # addresses are not encoded
    payload_len = max(summary.length - len(header), 0)
    return (header + rng.randbytes(payload_len))[: summary.length]


def build_mock_detail(summary: PacketSummary, raw_bytes: bytes) -> PacketDetail:
    layers = [
        ProtocolLayer(
            name="Frame",
            fields=(
                ("Frame Number", str(summary.id)),
                ("Frame Length", f"{summary.length} bytes"),
            ),
        ),
        ProtocolLayer(
            name="Ethernet II",
            fields=(("Type", "IPv4 (0x0800)"),),
        ),
    ]
    if summary.protocol != "ARP":
        layers.append(
            ProtocolLayer(
                name="Internet Protocol",
                fields=(
                    ("Source Address", summary.source_addr),
                    ("Destination Address", summary.dest_addr),
                    ("Time to Live", "64"),
                ),
            )
        )
    layers.append(ProtocolLayer(name=summary.protocol, fields=(("Info", summary.info),)))
    return PacketDetail(summary=summary, layers=tuple(layers), raw_bytes=raw_bytes)
