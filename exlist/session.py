#!/usr/bin/env python3
"""
Interactive list session: terminal setup, key dispatch and restore.

`run_list()` takes the progress store, keeps it for the whole session and
hands it back when the user quits or picks an exercise to continue at.
The terminal is restored even when drawing or a store action fails.
"""

from __future__ import annotations

import logging
import shutil
import signal
import sys
import threading
from typing import Callable, Optional, TextIO, Tuple

from .keys import KeyReader
from .list_view import ListView
from .models import Filter
from .term import (
    CLEAR_SCREEN,
    DISABLE_LINE_WRAP,
    ENABLE_LINE_WRAP,
    ENTER_ALTERNATE_SCREEN,
    HIDE_CURSOR,
    LEAVE_ALTERNATE_SCREEN,
    RESET,
    SHOW_CURSOR,
)

logger = logging.getLogger(__name__)

KEY_ACTIONS = {
    "q": "quit",
    "j": "next",
    "DOWN": "next",
    "k": "previous",
    "UP": "previous",
    "g": "first",
    "HOME": "first",
    "G": "last",
    "END": "last",
    "d": "filter_done",
    "p": "filter_pending",
    "r": "reset",
    "c": "continue",
}


def terminal_size() -> Tuple[int, int]:
    size = shutil.get_terminal_size(fallback=(80, 24))
    return size.columns, size.lines


def dispatch(view: ListView, key: str) -> Optional[bool]:
    """Apply the action bound to `key`.

    Returns None for unbound keys (nothing to redraw), True when the session
    should end and False when it continues with a redraw.
    """
    action = KEY_ACTIONS.get(key)
    if action is None:
        return None

    view.message = ""
    logger.debug("Key %r -> %s", key, action)

    if action == "quit":
        return True
    if action == "next":
        view.select_next()
    elif action == "previous":
        view.select_previous()
    elif action == "first":
        view.select_first()
    elif action == "last":
        view.select_last()
    elif action == "filter_done":
        view.toggle_filter(Filter.DONE)
    elif action == "filter_pending":
        view.toggle_filter(Filter.PENDING)
    elif action == "reset":
        view.reset_selected()
    elif action == "continue":
        return view.selected_to_current()
    return False


class _ResizeWatcher:
    """Flags SIGWINCH so the loop can pick up the new size between frames."""

    def __init__(self) -> None:
        self.pending = threading.Event()
        self._original = None

    def _handle(self, signum, frame) -> None:
        self.pending.set()

    def __enter__(self) -> "_ResizeWatcher":
        sig = getattr(signal, "SIGWINCH", None)
        if sig is not None and threading.current_thread() is threading.main_thread():
            self._original = signal.getsignal(sig)
            signal.signal(sig, self._handle)
        return self

    def __exit__(self, *_) -> None:
        sig = getattr(signal, "SIGWINCH", None)
        if sig is not None and self._original is not None:
            signal.signal(sig, self._original)


def _handle_list(
    store,
    out: TextIO,
    key_reader,
    size_fn: Callable[[], Tuple[int, int]],
    resize: _ResizeWatcher,
) -> None:
    width, height = size_fn()
    view = ListView(store, width, height)
    view.draw(out)

    while True:
        if resize.pending.is_set():
            resize.pending.clear()
            width, height = size_fn()
            logger.debug("Resize to %dx%d", width, height)
            view.set_term_size(width, height)
            view.draw(out)

        key = key_reader.read_key(timeout=0.1)
        if key is None:
            continue

        result = dispatch(view, key)
        if result is None:
            continue
        if result:
            return
        view.draw(out)


def run_list(
    store,
    out: Optional[TextIO] = None,
    key_reader=None,
    size_fn: Callable[[], Tuple[int, int]] = terminal_size,
):
    """Run the interactive list until the user leaves it, then return `store`."""
    out = out or sys.stdout
    owns_reader = key_reader is None

    out.write(ENTER_ALTERNATE_SCREEN)
    out.write(HIDE_CURSOR)
    out.write(DISABLE_LINE_WRAP)
    out.write(CLEAR_SCREEN)
    logger.debug("List session started")
    try:
        if owns_reader:
            key_reader = KeyReader()
        with _ResizeWatcher() as resize:
            _handle_list(store, out, key_reader, size_fn, resize)
    except Exception:
        logger.exception("List session failed")
        raise
    finally:
        if owns_reader and key_reader is not None:
            key_reader.close()
        out.write(RESET)
        out.write(LEAVE_ALTERNATE_SCREEN)
        out.write(SHOW_CURSOR)
        out.write(ENABLE_LINE_WRAP)
        out.flush()
        logger.debug("List session stopped")
    return store
