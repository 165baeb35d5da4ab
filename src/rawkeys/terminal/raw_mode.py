"""Raw-mode lifecycle controller.

Owns the one-time capture of the terminal's original attributes, the
transition into raw mode, and the restoration of the original on every
exit path out of its ``with`` scope.
"""

from __future__ import annotations

import logging
import signal
from contextlib import contextmanager
from typing import Iterator

from rawkeys.domain.models import RawModeProfile, TerminalAttributes
from rawkeys.terminal.config import ConfigError, FlushPolicy, TerminalConfig
from rawkeys.terminal.modes import DEFAULT_PROFILE, derive_raw

logger = logging.getLogger(__name__)

# Held pending while attributes are being switched, so a termination
# request cannot land between an install and the bookkeeping around it.
DEFERRED_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


@contextmanager
def _signals_deferred(signums: tuple[int, ...]) -> Iterator[None]:
    """Block ``signums`` for the duration of the block.

    Signals that arrive meanwhile are delivered when the block exits.
    """
    if not signums:
        yield
        return
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, signums)
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


class RawModeController:
    """Switches a terminal into raw mode and guarantees it is put back.

    The original attribute set is captured once, before anything is
    changed, and is never overwritten afterwards. Leaving the ``with``
    block by any route (normal return, exception, ``sys.exit``)
    reinstates it. SIGTERM and SIGHUP are held back while attributes are
    being installed, so a handler that raises cannot strand the terminal
    in raw mode.

    Example usage::

        with RawModeController(TerminalConfig(sys.stdin.fileno())):
            loop.run()

    Calling ``enable()`` twice without a ``disable()`` in between is a
    precondition violation; the second call is ignored.
    """

    def __init__(
        self,
        terminal: TerminalConfig,
        profile: RawModeProfile = DEFAULT_PROFILE,
        flush: FlushPolicy = FlushPolicy.FLUSH,
        deferred_signals: tuple[int, ...] = DEFERRED_SIGNALS,
    ) -> None:
        self._terminal = terminal
        self._profile = profile
        self._flush = flush
        self._deferred_signals = deferred_signals
        self._original: TerminalAttributes | None = None
        self._active = False

    @property
    def is_active(self) -> bool:
        """Whether raw mode is in effect and restoration is still owed."""
        return self._active

    @property
    def original(self) -> TerminalAttributes | None:
        """The attributes captured before raw mode was first entered."""
        return self._original

    def enable(self) -> None:
        """Capture the original attributes and enter raw mode.

        Raises:
            ConfigError: If the attributes cannot be read or the raw set
                         cannot be installed. Once the original has been
                         captured, any failure (including a SystemExit
                         raised by a signal handler) reinstates it before
                         propagating.
        """
        if self._active:
            logger.warning("Raw mode already enabled on fd %d", self._terminal.fd)
            return

        try:
            with _signals_deferred(self._deferred_signals):
                if self._original is None:
                    self._original = self._terminal.capture()

                # From here on the original must be put back on every exit path.
                self._active = True
                self._terminal.apply(derive_raw(self._original, self._profile), self._flush)
            logger.info("Raw mode enabled on fd %d", self._terminal.fd)
        except BaseException as e:
            if self._active:
                if isinstance(e, ConfigError):
                    logger.error("Failed to enter raw mode on fd %d", self._terminal.fd)
                self.disable()
            raise

    def disable(self) -> None:
        """Reinstate the original attributes.

        A no-op when raw mode is not active.

        Raises:
            ConfigError: If the original cannot be written back. The
                         terminal may be left in raw mode.
        """
        if not self._active or self._original is None:
            return

        # Only one attempt per activation, even if the write fails.
        self._active = False
        with _signals_deferred(self._deferred_signals):
            self._terminal.apply(self._original, self._flush)
        logger.info("Terminal attributes restored on fd %d", self._terminal.fd)

    def __enter__(self) -> RawModeController:
        """Context manager entry -- enters raw mode."""
        self.enable()
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        """Context manager exit -- restores the original attributes."""
        self.disable()
