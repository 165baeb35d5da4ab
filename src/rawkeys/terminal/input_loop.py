"""Byte-at-a-time keystroke reader and reporter.

Runs while the terminal is in raw mode: reads one byte, prints its
decimal code (plus the character when printable), and stops once the
quit byte has been reported.
"""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from rawkeys.domain.models import KeyReport
from rawkeys.terminal.config import ConfigError

logger = logging.getLogger(__name__)

# Reported when a read times out with no byte available.
NO_BYTE = 0

DEFAULT_QUIT_BYTE = ord("q")


class InputLoop:
    """Reads single bytes from a raw-mode terminal and reports them.

    Reads rely on the VMIN/VTIME settings installed by the raw-mode
    controller, so each read returns after at most one timeout period.
    """

    def __init__(
        self,
        fd: int,
        output: BinaryIO,
        quit_byte: int = DEFAULT_QUIT_BYTE,
    ) -> None:
        self._fd = fd
        self._output = output
        self._quit_byte = quit_byte

    @property
    def quit_byte(self) -> int:
        return self._quit_byte

    def read_byte(self) -> int:
        """Read one byte, or NO_BYTE if the read timed out.

        Raises:
            ConfigError: On a genuine device read error.
        """
        try:
            data = os.read(self._fd, 1)
        except BlockingIOError:
            return NO_BYTE
        except OSError as e:
            raise ConfigError.from_os_error("read", e) from e
        if not data:
            return NO_BYTE
        return data[0]

    @staticmethod
    def classify(code: int) -> KeyReport:
        return KeyReport(code=code)

    def report(self, code: int) -> KeyReport:
        """Write the report line for ``code`` and flush it."""
        key = self.classify(code)
        self._output.write(key.render())
        self._output.flush()
        return key

    def run(self) -> int:
        """Read and report bytes until the quit byte arrives.

        Timeouts are reported like a NUL byte and do not end the loop.

        Returns:
            The number of reports written, the quit byte included.
        """
        count = 0
        logger.debug("Input loop started on fd %d", self._fd)
        while True:
            code = self.read_byte()
            self.report(code)
            count += 1
            if code == self._quit_byte:
                break
        logger.debug("Input loop finished after %d reads", count)
        return count
