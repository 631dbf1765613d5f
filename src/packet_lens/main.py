from __future__ import annotations

import argparse
import importlib.metadata
import traceback

from packet_lens.capture.logging_setup import VALID_LEVELS, configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="packet-lens",
        description="packet-lens: live packet list, display filter and statistics",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=importlib.metadata.version("packet-lens"),
    )
    parser.add_argument(
        "--debug",
        dest="debug",
        action="store_true",
        help="Enable verbose debug logs",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=VALID_LEVELS,
        help="stderr log level (LOG_LEVEL in the environment still wins)",
    )
    parser.add_argument(
        "--no-log-file",
        dest="log_to_file",
        action="store_false",
        help="Do not write the rotating log file",
    )

    sub = parser.add_subparsers(dest="command")

    from packet_lens.headless_cli import register_subcommands

    register_subcommands(sub)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    configure_logging(
        args.log_level or ("DEBUG" if args.debug else None),
        log_to_file=args.log_to_file,
    )

    from packet_lens.headless_cli import run_command

    try:
        return run_command(args)
    except Exception as exc:  # noqa: BLE001
        if args.debug:
            print(f"[debug] error: {exc}")
            traceback.print_exc()
        else:
            print(f"error: {exc}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
