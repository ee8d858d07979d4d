"""Command line entry point for the Stoker exporter.

Usage
-----
Stream from the telnet port::

    stoker-exporter --stoker 192.168.1.103

Or poll the JSON endpoint::

    stoker-exporter --url http://192.168.1.103/stoker.json --listen :9190
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from pystoker import __version__
from pystoker.config import StokerConfig
from pystoker.exceptions import StokerConfigError
from pystoker.server import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stoker-exporter",
        description="Export Stoker BBQ controller readings as Prometheus metrics.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--stoker", dest="address", help="Stoker telnet address host[:port] (streaming mode)")
    source.add_argument("--url", help="Stoker JSON endpoint URL (polling mode)")
    parser.add_argument("--listen", help="host:port to serve /metrics on (default: 0.0.0.0:9190)")
    parser.add_argument("--poll-interval", type=float, help="Seconds between JSON fetches")
    parser.add_argument("--fahrenheit", action="store_true", default=None, help="Export temperatures in °F")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(argv: Sequence[str] | None = None) -> tuple[StokerConfig, bool]:
    """Merge CLI flags over ``STOKER_*`` environment variables."""
    args = build_parser().parse_args(argv)
    overrides = {
        "address": args.address,
        "url": args.url,
        "listen": args.listen,
        "poll_interval": args.poll_interval,
        "fahrenheit": args.fahrenheit,
    }
    # A source given on the command line replaces whichever one the environment set.
    if args.address:
        overrides["url"] = ""
    elif args.url:
        overrides["address"] = ""
    config = StokerConfig.from_env(**overrides)
    config.validate()
    return config, args.verbose


def main(argv: Sequence[str] | None = None) -> None:
    try:
        config, verbose = load_config(argv)
    except StokerConfigError as exc:
        raise SystemExit(str(exc)) from exc

    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    run(config)


if __name__ == "__main__":
    main()
