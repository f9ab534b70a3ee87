"""
Command-line interface for avrflash.

This module provides the `avrflash` CLI tool for flashing and verifying
prebuilt AVR firmware.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

from avrflash import __version__
from avrflash.cli_utils import ErrorFormatter, Reporter
from avrflash.config import DEFAULT_BAUD_RATE, DEFAULT_PORT, resolve_request
from avrflash.deploy import DeploymentPipeline


@dataclass
class FlashArgs:
    """Arguments for a flash run."""

    port: Optional[str] = None
    baud: Optional[int] = None


_console_handler: Optional[logging.Handler] = None


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def setup_logging(level: int = logging.WARNING) -> None:
    """Setup logging to stderr, keeping stdout for the phase report."""
    global _console_handler

    logger = logging.getLogger()
    logger.setLevel(level)
    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
    _console_handler = console_handler


def flash_command(args: FlashArgs, pipeline: Optional[DeploymentPipeline] = None) -> None:
    """Flash the prebuilt firmware and verify it.

    Examples:
        avrflash                       # /dev/ttyUSB0 at 115200 baud
        avrflash /dev/ttyUSB1          # Specific port
        avrflash /dev/ttyUSB1 57600    # Specific port and baud rate
    """
    reporter = Reporter()

    try:
        request = resolve_request(args.port, args.baud)
        reporter.print_banner(request)

        if pipeline is None:
            pipeline = DeploymentPipeline(listener=reporter)
        elif pipeline.listener is None:
            pipeline.listener = reporter

        status = pipeline.run(request)
        reporter.print_summary(status)
        sys.exit(reporter.exit_code(status))

    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e)


def main(argv: Optional[List[str]] = None) -> None:
    """avrflash - flash and verify AVR firmware over a serial bootloader."""
    parser = argparse.ArgumentParser(
        prog="avrflash",
        description="Flash prebuilt ATmega128 firmware and verify it by reading it back",
        epilog=f"avrflash {__version__}",
    )
    parser.add_argument(
        "port",
        nargs="?",
        default=None,
        help=f"Serial port (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "baud",
        nargs="?",
        type=positive_int,
        default=None,
        help=f"Baud rate (default: {DEFAULT_BAUD_RATE})",
    )

    parsed_args = parser.parse_args(argv)
    setup_logging()

    flash_command(FlashArgs(port=parsed_args.port, baud=parsed_args.baud))


if __name__ == "__main__":
    main()
