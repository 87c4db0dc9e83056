#!/usr/bin/env python3
from __future__ import annotations

import io
import re

from exlist.progress import MIN_LINE_WIDTH, progress_bar, render_progress_text
from exlist.writer import MaxLenWriter

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def test_progress_text_fills_terminal_width_for_three_digit_totals():
    text = render_progress_text(50, 100, 60)
    assert len(text) == 60
    assert text.startswith("Progress: [" + "#" * 20 + ">")
    assert text.endswith("]  50/100")


def test_progress_text_small_totals():
    text = render_progress_text(0, 5, 40)
    assert text.startswith("Progress: [>")
    assert text.endswith("]   0/5")
    assert len(text) <= 40

    full = render_progress_text(5, 5, 40)
    assert ">" not in full
    assert "-" not in full
    assert full.endswith("]   5/5")


def test_progress_text_narrow_terminal():
    assert render_progress_text(3, 5, MIN_LINE_WIDTH - 1) == "Progress: 3/5"


def test_progress_text_zero_total_does_not_divide():
    text = render_progress_text(0, 0, 40)
    assert text.endswith("0/0")


def test_progress_bar_matches_plain_text_and_is_bounded():
    for progress, total, width in [(7, 22, 80), (0, 94, 30), (94, 94, 120), (3, 5, 10), (1, 1000, 25)]:
        out = io.StringIO()
        progress_bar(MaxLenWriter(out, width), progress, total, width)
        plain = ANSI_RE.sub("", out.getvalue())
        assert len(plain) <= width
        assert plain == render_progress_text(progress, total, width)[:width]
