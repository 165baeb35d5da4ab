"""Tests for the byte-at-a-time input loop."""

from __future__ import annotations

import errno
import io
import os
import select
import time
from unittest.mock import patch

import pytest

from rawkeys.terminal.config import ConfigError, TerminalConfig
from rawkeys.terminal.input_loop import NO_BYTE, InputLoop
from rawkeys.terminal.raw_mode import RawModeController


def _reported(output: io.BytesIO) -> list[bytes]:
    """Report lines, minus the NUL lines produced by idle timeouts."""
    lines = output.getvalue().split(b"\r\n")
    assert lines[-1] == b""
    return [line for line in lines[:-1] if line != b"0"]


class TestReadByte:
    def test_reads_one_byte(self, pipe_fds: tuple[int, int]) -> None:
        read_fd, write_fd = pipe_fds
        os.write(write_fd, b"AB")
        loop = InputLoop(read_fd, io.BytesIO())
        assert loop.read_byte() == 0x41
        assert loop.read_byte() == 0x42

    def test_empty_read_is_no_byte(self, pipe_fds: tuple[int, int]) -> None:
        read_fd, write_fd = pipe_fds
        os.close(write_fd)
        assert InputLoop(read_fd, io.BytesIO()).read_byte() == NO_BYTE

    def test_would_block_is_no_byte(self) -> None:
        loop = InputLoop(5, io.BytesIO())
        with patch("os.read", side_effect=BlockingIOError(errno.EAGAIN, "Resource temporarily unavailable")):
            assert loop.read_byte() == NO_BYTE

    def test_read_error_is_fatal(self) -> None:
        loop = InputLoop(5, io.BytesIO())
        with patch("os.read", side_effect=OSError(errno.EIO, "Input/output error")):
            with pytest.raises(ConfigError) as excinfo:
                loop.read_byte()
        assert excinfo.value.operation == "read"
        assert excinfo.value.errno == errno.EIO


class TestReport:
    def test_report_writes_and_flushes(self) -> None:
        output = io.BytesIO()
        key = InputLoop(5, output).report(0x41)
        assert output.getvalue() == b"65 ('A')\r\n"
        assert not key.is_control

    def test_classify(self) -> None:
        assert InputLoop.classify(3).is_control
        assert not InputLoop.classify(ord("q")).is_control


class TestRun:
    def test_stops_after_quit_byte(self) -> None:
        output = io.BytesIO()
        loop = InputLoop(5, output)
        with patch.object(loop, "read_byte", side_effect=[3, 0x41, ord("q"), ord("z")]):
            count = loop.run()
        assert count == 3
        assert output.getvalue() == b"3\r\n65 ('A')\r\n113 ('q')\r\n"

    def test_timeouts_do_not_end_loop(self) -> None:
        output = io.BytesIO()
        loop = InputLoop(5, output)
        with patch.object(loop, "read_byte", side_effect=[NO_BYTE, NO_BYTE, ord("q")]):
            assert loop.run() == 3
        assert output.getvalue() == b"0\r\n0\r\n113 ('q')\r\n"

    def test_custom_quit_byte(self) -> None:
        output = io.BytesIO()
        loop = InputLoop(5, output, quit_byte=ord("x"))
        assert loop.quit_byte == ord("x")
        with patch.object(loop, "read_byte", side_effect=[ord("q"), ord("x")]):
            assert loop.run() == 2
        assert output.getvalue() == b"113 ('q')\r\n120 ('x')\r\n"

    def test_read_error_propagates(self) -> None:
        loop = InputLoop(5, io.BytesIO())
        with patch.object(loop, "read_byte", side_effect=ConfigError("read", "Input/output error")):
            with pytest.raises(ConfigError):
                loop.run()


class TestOnRealTerminal:
    def test_idle_read_times_out(self, pty_pair: tuple[int, int]) -> None:
        _, slave = pty_pair
        loop = InputLoop(slave, io.BytesIO())
        with RawModeController(TerminalConfig(slave)):
            start = time.monotonic()
            code = loop.read_byte()
            elapsed = time.monotonic() - start
        assert code == NO_BYTE
        assert elapsed < 0.5

    def test_keystrokes_end_to_end(self, pty_pair: tuple[int, int]) -> None:
        master, slave = pty_pair
        output = io.BytesIO()
        loop = InputLoop(slave, output)
        with RawModeController(TerminalConfig(slave)):
            os.write(master, b"\x03A\rq")
            select.select([slave], [], [], 1.0)
            loop.run()
        # Ctrl-C and CR arrive as plain bytes: no signal, no CR-to-NL.
        assert _reported(output) == [b"3", b"65 ('A')", b"13", b"113 ('q')"]
