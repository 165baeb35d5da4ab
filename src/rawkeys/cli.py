"""Command-line interface for rawkeys.

Provides the main entry point: puts the controlling terminal into raw
mode, reports every byte typed until the quit key arrives, and restores
the terminal on the way out.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1

# Termination requests that should unwind through raw-mode restoration.
# SIGINT needs no handler: Ctrl-C is delivered as a plain byte in raw mode.
EXIT_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="rawkeys",
        description="Show the byte codes of keys typed in raw terminal mode (type q to quit)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to an optional YAML configuration file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


@contextmanager
def _exit_on_signals(signums: tuple[int, ...] = EXIT_SIGNALS) -> Iterator[None]:
    """Turn termination signals into SystemExit for the duration of the block."""

    def _handler(signum: int, frame: object) -> None:
        logger.info("Received signal %d, exiting", signum)
        raise SystemExit(128 + signum)

    previous = {signum: signal.signal(signum, _handler) for signum in signums}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def run_inspector(settings, fd: int, output: BinaryIO) -> int:
    """Run the keystroke inspector on ``fd`` and return the exit code."""
    from rawkeys.terminal.config import ConfigError, TerminalConfig
    from rawkeys.terminal.input_loop import InputLoop
    from rawkeys.terminal.raw_mode import RawModeController

    terminal = TerminalConfig(fd)
    controller = RawModeController(
        terminal,
        profile=settings.raw_mode.to_profile(),
        flush=settings.raw_mode.to_flush_policy(),
    )
    loop = InputLoop(fd, output, quit_byte=settings.input.quit_byte)

    try:
        with _exit_on_signals(), controller:
            loop.run()
    except ConfigError as e:
        # The controller has already attempted restoration by now.
        logger.debug("Aborting after %s failure (errno=%s)", e.operation, e.errno)
        if not terminal.is_terminal:
            logger.info("fd %d is not a terminal; run rawkeys from an interactive shell", fd)
        print(f"rawkeys: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the rawkeys CLI."""
    args = parse_args(argv)

    from rawkeys.config.settings import load_settings
    from rawkeys.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    logger.info("Starting keystroke inspector (quit with %r)", settings.input.quit_key)
    return run_inspector(settings, sys.stdin.fileno(), sys.stdout.buffer)


if __name__ == "__main__":
    sys.exit(main())
