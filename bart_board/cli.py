"""Command-line entry point for the BART terminal board."""

from __future__ import annotations

import argparse
import curses
import logging
import sys

from bart_board.app import run
from bart_board.config import (
    API_KEY_ENV,
    ConfigError,
    MissingCredentialError,
    configure_logging,
    load_config,
)
from bart_board.display import TerminalDisplay

logger = logging.getLogger(__name__)

MISSING_KEY_HELP = f"""
Please set {API_KEY_ENV} environment variable:

export {API_KEY_ENV}=(your api key)
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bart-board",
        description="Live BART departures in the terminal.",
    )
    parser.add_argument(
        "station",
        nargs="?",
        help="Station code to track directly, e.g. POWL (case-insensitive)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: config/config.yaml if present)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, station=args.station)
    except MissingCredentialError:
        print(MISSING_KEY_HELP, file=sys.stderr)
        return 1
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    try:
        configure_logging(config.log)
    except (ConfigError, OSError) as exc:
        print(f"Could not set up logging: {exc}", file=sys.stderr)
        return 1

    try:
        with TerminalDisplay() as display:
            return run(config, display)
    except curses.error as exc:
        logger.exception("Terminal start-up failed")
        print(f"\nError starting program: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
