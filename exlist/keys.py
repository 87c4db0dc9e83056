#!/usr/bin/env python3
"""
Key input for the interactive list.

`KeyReader` puts the terminal in cbreak mode and returns printable keys as
themselves and special keys as names ("UP", "DOWN", "HOME", "END",
"PAGE_UP", "PAGE_DOWN", "ESC").

On POSIX the reader takes raw bytes from the tty descriptor and keeps
whatever arrived after the first key in its own buffer, so a terminal that
sends an escape sequence (or several keys) in one burst still yields one
key per `read_key()` call.
"""

from __future__ import annotations

import codecs
import os
import select
import sys
import time
from typing import Optional, Tuple

ESC = "\x1b"

ESCAPE_SEQUENCES = {
    "\x1b[A": "UP",
    "\x1b[B": "DOWN",
    "\x1b[C": "RIGHT",
    "\x1b[D": "LEFT",
    "\x1bOA": "UP",
    "\x1bOB": "DOWN",
    "\x1b[H": "HOME",
    "\x1b[F": "END",
    "\x1bOH": "HOME",
    "\x1bOF": "END",
    "\x1b[1~": "HOME",
    "\x1b[4~": "END",
    "\x1b[7~": "HOME",
    "\x1b[8~": "END",
    "\x1b[5~": "PAGE_UP",
    "\x1b[6~": "PAGE_DOWN",
}
MAX_SEQUENCE_LEN = 8

# Time to wait for the rest of a split escape sequence.
ESCAPE_TIMEOUT = 0.02
READ_CHUNK = 64

# msvcrt scan codes following a "\x00" / "\xe0" prefix.
WINDOWS_SCAN_CODES = {
    "H": "UP",
    "P": "DOWN",
    "K": "LEFT",
    "M": "RIGHT",
    "G": "HOME",
    "O": "END",
    "I": "PAGE_UP",
    "Q": "PAGE_DOWN",
}


def decode_escape(seq: str) -> str:
    """Name an escape sequence; a lone or unknown one reads as "ESC"."""
    return ESCAPE_SEQUENCES.get(seq, "ESC")


def split_key(buf: str) -> Tuple[Optional[str], str]:
    """Take one key off the front of `buf` and return `(key, rest)`.

    `key` is None when `buf` is empty or starts with an escape sequence
    that hasn't fully arrived yet.
    """
    if not buf:
        return None, buf
    if buf[0] != ESC:
        return buf[0], buf[1:]
    if len(buf) == 1:
        return None, buf
    if buf[1] not in "[O":
        return "ESC", buf[1:]

    for i in range(2, min(len(buf), MAX_SEQUENCE_LEN)):
        ch = buf[i]
        if ch.isalpha() or ch == "~":
            return decode_escape(buf[: i + 1]), buf[i + 1:]
        if not (ch.isdigit() or ch == ";"):
            return "ESC", buf[i:]

    if len(buf) >= MAX_SEQUENCE_LEN:
        return "ESC", buf[MAX_SEQUENCE_LEN:]
    return None, buf


class KeyReader:
    """Cross-platform key reader for stdin, or for the tty behind `fd`."""

    def __init__(self, fd: Optional[int] = None) -> None:
        self._win = os.name == "nt"
        self._closed = False
        self._pending = ""
        if fd is None:
            if not sys.stdin.isatty():
                raise RuntimeError("stdin is not attached to a TTY")
            if self._win:
                return
            fd = sys.stdin.fileno()
        elif not os.isatty(fd):
            raise RuntimeError(f"fd {fd} is not a TTY")

        import termios
        import tty

        self._termios = termios
        self._fd = fd
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._old_settings = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def close(self) -> None:
        if self._win or self._closed:
            return
        self._termios.tcsetattr(self._fd, self._termios.TCSADRAIN, self._old_settings)
        self._closed = True

    def __enter__(self) -> "KeyReader":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def read_key(self, timeout: float = 0.1) -> Optional[str]:
        """Return the next key, or None if nothing arrived within `timeout` seconds."""
        if self._win:
            return self._read_key_windows(timeout)

        key = self._take_key()
        if key is not None:
            return key

        wait = ESCAPE_TIMEOUT if self._pending else timeout
        while self._fill(wait):
            key = self._take_key()
            if key is not None:
                return key
            wait = ESCAPE_TIMEOUT

        if self._pending:
            # The rest of the sequence never came: a plain Escape press.
            self._pending = ""
            return "ESC"
        return None

    def _take_key(self) -> Optional[str]:
        key, self._pending = split_key(self._pending)
        return key

    def _fill(self, timeout: float) -> bool:
        """Append whatever the tty has within `timeout` to the buffer."""
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return False
        data = os.read(self._fd, READ_CHUNK)
        if not data:
            return False
        self._pending += self._decoder.decode(data)
        return True

    def _read_key_windows(self, timeout: float) -> Optional[str]:
        import msvcrt  # type: ignore

        end = time.time() + timeout
        while time.time() < end:
            if msvcrt.kbhit():  # type: ignore[attr-defined]
                ch = msvcrt.getwch()  # type: ignore[attr-defined]
                if ch in ("\x00", "\xe0"):
                    code = msvcrt.getwch()  # type: ignore[attr-defined]
                    name = WINDOWS_SCAN_CODES.get(code.upper())
                    if name:
                        return name
                    continue
                if ch == ESC:
                    return "ESC"
                return ch
            time.sleep(0.01)
        return None
