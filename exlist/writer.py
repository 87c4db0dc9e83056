#!/usr/bin/env python3
"""
Column-bounded writing for a single terminal line.

`MaxLenWriter` counts the columns of everything written through it and
silently drops what no longer fits. Escape sequences must go straight to
`writer.out` so they are not counted. A glyph written straight to `out`
is accounted for with `add_to_len`.
"""

from __future__ import annotations

from typing import TextIO

from rich.cells import cell_len


class MaxLenWriter:
    def __init__(self, out: TextIO, max_len: int) -> None:
        self.out = out
        self.max_len = max(0, int(max_len))
        self.len = 0

    def remaining(self) -> int:
        return max(0, self.max_len - self.len)

    def add_to_len(self, additional: int) -> None:
        # For glyphs wider than one column written directly to `out`.
        self.len += additional

    def write_ascii(self, text: str) -> None:
        """Write the leading part of `text` that fits, one column per character."""
        n = min(self.remaining(), len(text))
        if n > 0:
            self.out.write(text[:n])
            self.len += n

    def write_str(self, text: str) -> None:
        """Write the leading part of `text` that fits, measured in terminal cells.

        A double-width character that would straddle the limit is dropped
        together with everything after it.
        """
        budget = self.remaining()
        used = 0
        end = 0
        for ch in text:
            width = cell_len(ch)
            if used + width > budget:
                break
            used += width
            end += 1
        if end:
            self.out.write(text[:end])
            self.len += used
