"""Domain models for rawkeys.

This package contains the terminal attribute snapshot, the named raw-mode
options, and the per-byte key report. All models use Pydantic v2 for
validation and are frozen once built.
"""

from rawkeys.domain.models import (
    FlagGroup,
    KeyReport,
    RawModeProfile,
    TerminalAttributes,
    TerminalMode,
)

__all__ = [
    "FlagGroup",
    "KeyReport",
    "RawModeProfile",
    "TerminalAttributes",
    "TerminalMode",
]
