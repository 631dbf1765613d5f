from __future__ import annotations

import argparse
import json

from gi.repository import GLib

from packet_lens.capture.config import load_runtime_config
from packet_lens.core.models import PacketSummary, Statistics
from packet_lens.mock import MockCaptureClient
from packet_lens.state.session import CaptureSession


def register_subcommands(sub: argparse._SubParsersAction) -> None:
    sub.add_parser("interfaces", help="List capture interfaces")

    watch = sub.add_parser(
        "watch", help="Run a synthetic capture and print the filtered view and statistics"
    )
    watch.add_argument("--interface", default=None, help="Interface to capture on")
    watch.add_argument(
        "--duration", type=float, default=5.0, help="Stop after N seconds (0 = until Ctrl+C)"
    )
    watch.add_argument("--filter", default="", help="Display filter, e.g. 'protocol:tcp'")
    watch.add_argument("--rows", type=int, default=20, help="Print the last N matching packets")
    watch.add_argument("--json", action="store_true", help="Print statistics as JSON")
    watch.add_argument("--export", default=None, help="Export the matching packets to a file")

    export = sub.add_parser("export-logs", help="Export application logs for bug reports")
    export.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write logs to file (default: stdout)",
    )


def _export_logs(output: str | None) -> int:
    from packet_lens.capture.logging_setup import export_logs_to_path, export_logs_to_stdout

    if output:
        export_logs_to_path(output)
        print(f"Logs written to {output}")
    else:
        export_logs_to_stdout()
    return 0


def _statistics_to_dict(stats: Statistics) -> dict:
    return {
        "total_packets": stats.total_packets,
        "total_bytes": stats.total_bytes,
        "average_packet_size": round(stats.average_packet_size, 1),
        "protocols": [
            {
                "protocol": p.protocol,
                "count": p.count,
                "percentage": round(p.percentage, 1),
                "total_bytes": p.total_bytes,
            }
            for p in stats.protocols
        ],
        "top_sources": [{"address": t.address, "count": t.count} for t in stats.top_sources],
        "top_destinations": [
            {"address": t.address, "count": t.count} for t in stats.top_destinations
        ],
    }


def _print_rows(session: CaptureSession, packets: tuple[PacketSummary, ...]) -> None:
    for packet in packets:
        print(
            f"{packet.id:>7}  {session.formatters.timestamp(packet.timestamp)}  "
            f"{packet.source_addr:<16} {packet.dest_addr:<16} {packet.protocol:<7} "
            f"{packet.length:>5}  {packet.info}"
        )


def _print_statistics(stats: Statistics) -> None:
    print(
        f"packets={stats.total_packets} bytes={stats.total_bytes} "
        f"avg={stats.average_packet_size:.1f}"
    )
    for p in stats.protocols:
        print(f"  {p.protocol:<7} {p.count:>6} {p.percentage:5.1f}%  {p.total_bytes} bytes")
    if stats.top_sources:
        print("top sources: " + ", ".join(f"{t.address} ({t.count})" for t in stats.top_sources))


def _run_watch(args: argparse.Namespace) -> int:
    config = load_runtime_config()
    service = MockCaptureClient(config)
    session = CaptureSession(service, config)
    loop = GLib.MainLoop()
    try:
        session.refresh_interfaces()
        if not session.start_capture(args.interface):
            print(f"error: {session.capture_error}")
            return 1
        session.set_filter_text(args.filter)
        timeout_id = None
        if args.duration > 0:
            timeout_id = GLib.timeout_add(int(args.duration * 1000), _quit_once, loop)
        try:
            loop.run()
        except KeyboardInterrupt:
            if timeout_id is not None:
                GLib.source_remove(timeout_id)

        session.stop_capture()
        session.apply_filter_now()
        filtered = session.filtered
        if args.rows > 0:
            _print_rows(session, filtered[-args.rows :])
        print(f"{len(filtered)} of {len(session.buffer)} packets match {args.filter!r}")
        if args.json:
            print(json.dumps(_statistics_to_dict(session.statistics), indent=2))
        else:
            _print_statistics(session.statistics)
        if args.export:
            written = session.export_packets(args.export)
            if written is None:
                print(f"error: {session.capture_error}")
                return 1
            print(f"exported {written} packets to {args.export}")
        return 0
    finally:
        session.close()
        service.close()


def _quit_once(loop: GLib.MainLoop) -> bool:
    loop.quit()
    return False


def run_command(args: argparse.Namespace) -> int:
    if args.command == "export-logs":
        return _export_logs(args.output)
    if args.command == "interfaces":
        for name in MockCaptureClient().list_interfaces():
            print(name)
        return 0
    if args.command == "watch":
        return _run_watch(args)
    raise RuntimeError(f"Unsupported command: {args.command}")
