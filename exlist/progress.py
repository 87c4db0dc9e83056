#!/usr/bin/env python3
"""
Progress bar for the list footer.

The bar always spans exactly the terminal width:

    Progress: [#######>--------------]   7/22

Layout:
- `"Progress: ["` prefix and `"] ddd/ttt"` postfix around the bar.
- Fill is `#` (green), the head is `>`, the rest is `-` (red).
- Terminals too narrow for a useful bar get the plain `Progress: 7/22`.

`progress_bar()` writes through a `MaxLenWriter`, so on odd widths
(e.g. totals of 1000 or more) the line is clipped instead of wrapping.
`render_progress_text()` returns the same layout without colors, for
non-interactive output.
"""

from __future__ import annotations

from typing import Tuple

from .term import fg

PREFIX = "Progress: ["
POSTFIX_WIDTH = len("] xxx/xxx")
WRAPPER_WIDTH = len(PREFIX) + POSTFIX_WIDTH
MIN_LINE_WIDTH = WRAPPER_WIDTH + 4


def _split(progress: int, total: int, term_width: int) -> Tuple[int, int]:
    """Return (bar width, filled cells)."""
    width = term_width - WRAPPER_WIDTH
    if total <= 0:
        return width, 0
    progress = max(0, min(progress, total))
    return width, (width * progress) // total


def render_progress_text(progress: int, total: int, term_width: int) -> str:
    if term_width < MIN_LINE_WIDTH:
        return f"Progress: {progress}/{total}"
    width, filled = _split(progress, total, term_width)
    head = ">" if filled < width else ""
    rest = "-" * max(0, width - filled - 1)
    return f"{PREFIX}{'#' * filled}{head}{rest}] {progress:>3}/{total}"


def progress_bar(writer, progress: int, total: int, term_width: int) -> None:
    if term_width < MIN_LINE_WIDTH:
        writer.write_ascii(f"Progress: {progress}/{total}")
        return

    width, filled = _split(progress, total, term_width)
    writer.write_ascii(PREFIX)

    writer.out.write(fg("green"))
    writer.write_ascii("#" * filled)
    if filled < width:
        writer.write_ascii(">")

    if width - filled > 1:
        writer.out.write(fg("red"))
        writer.write_ascii("-" * (width - filled - 1))

    writer.out.write(fg("default"))
    writer.write_ascii(f"] {progress:>3}/{total}")
