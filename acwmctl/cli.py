"""Command-line interface for acwmctl."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from . import constants
from .commands import USAGE, parse_command
from .config import load_config
from .errors import ConfigError, UsageError
from .logging import configure_logging
from .orchestrator import EXIT_FAILURE, EXIT_OK, CommandOrchestrator

LOGGER = logging.getLogger(__name__)


class _UsageParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(f"{USAGE}\n{self.prog}: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog=constants.APP_NAME,
        description="Switch an air-conditioning unit on or off and set its fan level",
        usage="%(prog)s [-c CONFIG] [-v] <on|off|fan 1-4>",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=constants.DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every request at DEBUG level"
    )
    parser.add_argument("words", nargs="*", metavar="command")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        command = parse_command(args.words)
    except UsageError as exc:
        print(exc)
        return EXIT_FAILURE
    except SystemExit as exc:
        # argparse exits after printing --help
        return exc.code if isinstance(exc.code, int) else EXIT_OK

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Error loading config {args.config}: {exc}")
        return EXIT_FAILURE

    configure_logging(
        "DEBUG" if args.verbose else config.logging.level,
        log_path=config.logging.path,
        log_network=config.logging.log_network,
    )
    LOGGER.debug("Running %s against %s", command.describe(), config.aircon.address)

    orchestrator = CommandOrchestrator(config)
    outcome = asyncio.run(orchestrator.run(command))
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
