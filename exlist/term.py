#!/usr/bin/env python3
"""
Terminal control sequences for the exercise list.

Plain ANSI/OSC strings, no terminfo lookup. Callers write them into the
output stream between text and flush once per frame.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, TextIO

# ANSI
CSI = "\x1b["
OSC = "\x1b]"
ST = "\x1b\\"

HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
CLEAR_SCREEN = f"{CSI}2J"
CLEAR_UNTIL_NEWLINE = f"{CSI}K"
MOVE_TO_TOP_LEFT = f"{CSI}1;1H"
ENTER_ALTERNATE_SCREEN = f"{CSI}?1049h"
LEAVE_ALTERNATE_SCREEN = f"{CSI}?1049l"
DISABLE_LINE_WRAP = f"{CSI}?7l"
ENABLE_LINE_WRAP = f"{CSI}?7h"
BEGIN_SYNCHRONIZED_UPDATE = f"{CSI}?2026h"
END_SYNCHRONIZED_UPDATE = f"{CSI}?2026l"

RESET = f"{CSI}0m"
UNDERLINE = f"{CSI}4m"
NO_UNDERLINE = f"{CSI}24m"

FG_CODES = {
    "default": "39",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "gray": "90",
}


def move_to(column: int, row: int) -> str:
    """Absolute cursor position, 0-based like the rest of the view code."""
    return f"{CSI}{row + 1};{column + 1}H"


def move_to_next_line(n: int = 1) -> str:
    return f"{CSI}{n}E"


def fg(color: str) -> str:
    """Foreground color by name; unknown names fall back to the default color."""
    return f"{CSI}{FG_CODES.get(color, FG_CODES['default'])}m"


def bg_rgb(r: int, g: int, b: int) -> str:
    return f"{CSI}48;2;{r};{g};{b}m"


def next_ln(out: TextIO) -> None:
    """Clear the rest of the current line, then move to the start of the next one."""
    out.write(CLEAR_UNTIL_NEWLINE)
    out.write(move_to_next_line(1))


def terminal_file_link(writer, path: str, color: str, target: Optional[Path] = None) -> None:
    """Write `path` as an OSC 8 hyperlink to the file it names.

    `target` is the file to link to when `path` is relative to something
    other than the working directory. Only the visible text is counted by
    `writer`. Targets that don't resolve to an existing file are written as
    plain text.
    """
    try:
        canonical = Path(path if target is None else target).resolve(strict=True)
    except (OSError, RuntimeError):
        writer.write_str(path)
        return

    out = writer.out
    out.write(fg(color))
    out.write(UNDERLINE)
    out.write(f"{OSC}8;;{canonical.as_uri()}{ST}")
    writer.write_str(path)
    out.write(f"{OSC}8;;{ST}")
    out.write(fg("default"))
    out.write(NO_UNDERLINE)
