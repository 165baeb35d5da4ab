"""Terminal attribute snapshot and apply primitives.

Thin wrapper over ``termios.tcgetattr``/``termios.tcsetattr`` for one
file descriptor. Failures surface as ConfigError, which callers treat
as fatal.
"""

from __future__ import annotations

import enum
import logging
import os
import termios

from rawkeys.domain.models import TerminalAttributes

logger = logging.getLogger(__name__)


class FlushPolicy(enum.Enum):
    """When new attributes take effect relative to pending I/O."""

    NOW = termios.TCSANOW  # immediately
    DRAIN = termios.TCSADRAIN  # after pending output is written
    FLUSH = termios.TCSAFLUSH  # after output drains; unread input is discarded


class ConfigError(Exception):
    """Raised when a terminal attribute query or install fails.

    Also used for genuine read failures on the terminal device. Every
    ConfigError is fatal to the program.
    """

    def __init__(self, operation: str, description: str, errno: int | None = None) -> None:
        super().__init__(f"{operation}: {description}")
        self.operation = operation
        self.description = description
        self.errno = errno

    @classmethod
    def from_os_error(cls, operation: str, exc: BaseException) -> ConfigError:
        """Build from a ``termios.error`` or ``OSError``.

        ``termios.error`` carries ``(errno, strerror)`` in its args;
        ``OSError`` carries the same in dedicated attributes.
        """
        if isinstance(exc, OSError):
            return cls(operation, exc.strerror or str(exc), exc.errno)
        if len(exc.args) == 2:
            errno, description = exc.args
            return cls(operation, str(description), errno)
        return cls(operation, str(exc))


class TerminalConfig:
    """Reads and writes the attribute set of one terminal device.

    Example usage::

        terminal = TerminalConfig(sys.stdin.fileno())
        original = terminal.capture()
        terminal.apply(original, FlushPolicy.FLUSH)
    """

    def __init__(self, fd: int) -> None:
        self._fd = fd

    @property
    def fd(self) -> int:
        return self._fd

    @property
    def is_terminal(self) -> bool:
        return os.isatty(self._fd)

    def capture(self) -> TerminalAttributes:
        """Read the device's current attribute set.

        Raises:
            ConfigError: If the device cannot be queried (not a terminal,
                         I/O error, closed descriptor).
        """
        try:
            attrs = termios.tcgetattr(self._fd)
        except termios.error as e:
            raise ConfigError.from_os_error("tcgetattr", e) from e
        logger.debug("Captured terminal attributes for fd %d", self._fd)
        return TerminalAttributes.from_termios(attrs)

    def apply(
        self,
        attrs: TerminalAttributes,
        flush: FlushPolicy = FlushPolicy.FLUSH,
    ) -> None:
        """Install ``attrs`` as the device's current attribute set.

        Raises:
            ConfigError: If the device rejects the write.
        """
        try:
            termios.tcsetattr(self._fd, flush.value, attrs.to_termios())
        except termios.error as e:
            raise ConfigError.from_os_error("tcsetattr", e) from e
        logger.debug("Applied terminal attributes to fd %d (%s)", self._fd, flush.name)
