"""Shared test fixtures for the rawkeys test suite.

Provides real pseudo-terminals for tests that need a device, hand-built
attribute snapshots for pure tests, and a mock TerminalConfig for
exercising the raw-mode controller in isolation.
"""

from __future__ import annotations

import os
import pty
import termios
from typing import Iterator
from unittest.mock import MagicMock

import pytest

from rawkeys.domain.models import TerminalAttributes
from rawkeys.terminal.config import TerminalConfig

# Linux NCCS; large enough to hold VMIN/VTIME on every POSIX layout.
CC_SLOTS = 32


def _close_quietly(fd: int) -> None:
    try:
        os.close(fd)
    except OSError:
        pass


# ---------------------------------------------------------------------------
# Device Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pty_pair() -> Iterator[tuple[int, int]]:
    """A (master, slave) pseudo-terminal pair, closed after the test."""
    master, slave = pty.openpty()
    yield master, slave
    _close_quietly(master)
    _close_quietly(slave)


@pytest.fixture
def pipe_fds() -> Iterator[tuple[int, int]]:
    """A (read, write) pipe: a descriptor that is not a terminal."""
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    _close_quietly(read_fd)
    _close_quietly(write_fd)


# ---------------------------------------------------------------------------
# Attribute Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cooked_attributes() -> TerminalAttributes:
    """A typical canonical-mode attribute set, built without a device."""
    return TerminalAttributes(
        iflag=(
            termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP
            | termios.IXON | termios.IGNPAR
        ),
        oflag=termios.OPOST | termios.ONLCR,
        cflag=termios.CS7 | termios.CREAD,
        lflag=termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG | termios.ECHOE,
        ispeed=termios.B38400,
        ospeed=termios.B38400,
        cc=tuple(bytes([i]) for i in range(CC_SLOTS)),
    )


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_terminal(cooked_attributes: TerminalAttributes) -> MagicMock:
    """A mock TerminalConfig whose capture() returns cooked_attributes."""
    mock = MagicMock(spec=TerminalConfig)
    mock.fd = 7
    mock.capture.return_value = cooked_attributes
    return mock
