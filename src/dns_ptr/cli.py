"""CLI for the host table DNS server."""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from .config import Config
from .resolver import effective_zone
from .server import configure_logging, serve


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed CLI options:
            - config (str): Path to YAML host table config.
            - host (str): Bind address.
            - port (int): UDP port.
            - log_level (str): Logging level.
            - check (bool): Validate the config and exit.
    """
    parser = argparse.ArgumentParser(
        prog="dns-ptr",
        description="DNS server answering PTR queries from a YAML host table",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", default="config.yaml", help="Path to YAML config")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=5353, help="UDP port")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Load the config, report the host table and exit",
    )
    return parser.parse_args(argv)


def check(config_path: str) -> int:
    """Validate a config file.

    Returns:
        Process exit status: 0 when the config loads, 1 otherwise.
    """
    try:
        config = Config(config_path)
    except (ValueError, OSError) as exc:
        print(f"{config_path}: {exc}", file=sys.stderr)
        return 1
    print(f"{config_path}: {len(config.hosts)} hosts in zone {effective_zone(config.zone)}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run the CLI entry point.

    Starts the DNS server with parameters provided via the command line, or
    only validates the config when ``--check`` is given.
    """
    args = parse_args(argv)
    if args.check:
        configure_logging(args.log_level)
        sys.exit(check(args.config))
    try:
        asyncio.run(serve(args.config, args.host, args.port, args.log_level))
    except KeyboardInterrupt:
        pass
