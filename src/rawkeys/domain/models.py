"""Core domain models for the rawkeys system.

These models represent the data flowing through the raw-mode harness:
snapshots of the terminal's attribute set, the named terminal options
that raw mode switches on and off, and the per-byte reports emitted by
the input loop.
"""

from __future__ import annotations

import enum
import termios
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class FlagGroup(str, enum.Enum):
    """The four flag words of a termios attribute set."""

    INPUT = "iflag"
    OUTPUT = "oflag"
    CONTROL = "cflag"
    LOCAL = "lflag"


class TerminalMode(enum.Enum):
    """Boolean terminal options touched when entering raw mode.

    Each member carries the flag word it lives in and its termios mask.
    """

    # Input flags
    BREAK_INTERRUPT = (FlagGroup.INPUT, termios.BRKINT)
    CR_TO_NL = (FlagGroup.INPUT, termios.ICRNL)
    PARITY_CHECK = (FlagGroup.INPUT, termios.INPCK)
    STRIP_HIGH_BIT = (FlagGroup.INPUT, termios.ISTRIP)
    FLOW_CONTROL = (FlagGroup.INPUT, termios.IXON)

    # Output flags
    OUTPUT_PROCESSING = (FlagGroup.OUTPUT, termios.OPOST)

    # Control flags
    EIGHT_BIT_CHARS = (FlagGroup.CONTROL, termios.CS8)

    # Local flags
    ECHO = (FlagGroup.LOCAL, termios.ECHO)
    CANONICAL = (FlagGroup.LOCAL, termios.ICANON)
    EXTENDED_INPUT = (FlagGroup.LOCAL, termios.IEXTEN)
    SIGNALS = (FlagGroup.LOCAL, termios.ISIG)

    @property
    def group(self) -> FlagGroup:
        return self.value[0]

    @property
    def mask(self) -> int:
        return self.value[1]


# ---------------------------------------------------------------------------
# Terminal Attribute Models
# ---------------------------------------------------------------------------

# termios reports control characters as one-byte strings, except VMIN and
# VTIME which come back as ints while canonical mode is off.
ControlChar = Union[bytes, int]


class TerminalAttributes(BaseModel):
    """An immutable snapshot of a terminal's attribute set.

    Mirrors the list returned by ``termios.tcgetattr``. Never mutated in
    place; derive a new snapshot with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    iflag: int = Field(ge=0, description="Input mode flags")
    oflag: int = Field(ge=0, description="Output mode flags")
    cflag: int = Field(ge=0, description="Control mode flags")
    lflag: int = Field(ge=0, description="Local mode flags")
    ispeed: int = Field(ge=0, description="Input baud rate constant")
    ospeed: int = Field(ge=0, description="Output baud rate constant")
    cc: tuple[ControlChar, ...] = Field(description="Control character array")

    @classmethod
    def from_termios(cls, attrs: list) -> TerminalAttributes:
        """Build a snapshot from the ``termios.tcgetattr`` list layout."""
        iflag, oflag, cflag, lflag, ispeed, ospeed, cc = attrs
        return cls(
            iflag=iflag,
            oflag=oflag,
            cflag=cflag,
            lflag=lflag,
            ispeed=ispeed,
            ospeed=ospeed,
            cc=tuple(cc),
        )

    def to_termios(self) -> list:
        """Return a fresh list suitable for ``termios.tcsetattr``."""
        return [
            self.iflag,
            self.oflag,
            self.cflag,
            self.lflag,
            self.ispeed,
            self.ospeed,
            list(self.cc),
        ]

    def flags(self, group: FlagGroup) -> int:
        return getattr(self, group.value)

    @property
    def cc_codes(self) -> tuple[int, ...]:
        """Control characters as ints, whatever form termios returned."""
        return tuple(c if isinstance(c, int) else ord(c) for c in self.cc)

    def matches(self, other: TerminalAttributes) -> bool:
        """Observational equivalence with another snapshot.

        The device reports VMIN/VTIME as bytes or ints depending on the
        canonical-mode flag, so control characters are compared by code.
        """
        return (
            self.iflag == other.iflag
            and self.oflag == other.oflag
            and self.cflag == other.cflag
            and self.lflag == other.lflag
            and self.ispeed == other.ispeed
            and self.ospeed == other.ospeed
            and self.cc_codes == other.cc_codes
        )


class RawModeProfile(BaseModel):
    """Which terminal options raw mode turns off and on.

    The defaults are the canonical raw-mode baseline: no signals, no line
    buffering, no echo, no literal-next, no XON/XOFF, no CR-to-NL on
    input, no output post-processing, no legacy break/parity/strip
    handling, 8-bit characters, and a read that returns after at most
    one tenth of a second.
    """

    model_config = ConfigDict(frozen=True)

    disable: frozenset[TerminalMode] = Field(
        default=frozenset({
            TerminalMode.SIGNALS,
            TerminalMode.CANONICAL,
            TerminalMode.ECHO,
            TerminalMode.EXTENDED_INPUT,
            TerminalMode.FLOW_CONTROL,
            TerminalMode.CR_TO_NL,
            TerminalMode.OUTPUT_PROCESSING,
            TerminalMode.BREAK_INTERRUPT,
            TerminalMode.PARITY_CHECK,
            TerminalMode.STRIP_HIGH_BIT,
        }),
    )
    enable: frozenset[TerminalMode] = Field(
        default=frozenset({TerminalMode.EIGHT_BIT_CHARS}),
    )
    min_bytes: int = Field(default=0, ge=0, le=255, description="VMIN")
    read_timeout: int = Field(
        default=1, ge=0, le=255, description="VTIME, in tenths of a second"
    )


# ---------------------------------------------------------------------------
# Input Report Models
# ---------------------------------------------------------------------------


class KeyReport(BaseModel):
    """One byte read from the terminal, classified for display."""

    model_config = ConfigDict(frozen=True)

    code: int = Field(ge=0, le=255, description="Byte value as read")

    @property
    def is_control(self) -> bool:
        """ASCII control characters: 0-31 and DEL."""
        return self.code < 32 or self.code == 127

    def render(self) -> bytes:
        """Format the report line, ending with an explicit CR LF.

        Printable bytes are echoed verbatim between the quotes.
        """
        if self.is_control:
            return b"%d\r\n" % self.code
        return b"%d ('%c')\r\n" % (self.code, self.code)
