"""Terminal control module for rawkeys.

Captures and installs terminal attribute sets, manages the raw-mode
lifecycle, and runs the byte-at-a-time input loop.

Public API:
    TerminalConfig -- Snapshot/apply primitives for one descriptor
    RawModeController -- Enters raw mode and guarantees restoration
    InputLoop -- Reads and reports single bytes
    ConfigError -- Raised when the terminal cannot be read or configured
"""

from rawkeys.terminal.config import ConfigError, FlushPolicy, TerminalConfig
from rawkeys.terminal.input_loop import InputLoop
from rawkeys.terminal.modes import derive_raw
from rawkeys.terminal.raw_mode import RawModeController

__all__ = [
    "ConfigError",
    "FlushPolicy",
    "InputLoop",
    "RawModeController",
    "TerminalConfig",
    "derive_raw",
]
