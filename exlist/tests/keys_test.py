#!/usr/bin/env python3
from __future__ import annotations

import io
import os

import pytest

from exlist.keys import KeyReader, decode_escape, split_key


def test_decode_escape_names_navigation_keys():
    assert decode_escape("\x1b[A") == "UP"
    assert decode_escape("\x1bOB") == "DOWN"
    assert decode_escape("\x1b[H") == "HOME"
    assert decode_escape("\x1b[4~") == "END"


def test_decode_escape_unknown_is_esc():
    assert decode_escape("\x1b") == "ESC"
    assert decode_escape("\x1b[Z") == "ESC"


def test_split_key_takes_one_key_at_a_time():
    assert split_key("jk") == ("j", "k")
    assert split_key("\x1b[Bk") == ("DOWN", "k")
    assert split_key("\x1b[5~\x1b[A") == ("PAGE_UP", "\x1b[A")
    assert split_key("\x1b\x1b[A") == ("ESC", "\x1b[A")


def test_split_key_waits_for_incomplete_sequences():
    assert split_key("") == (None, "")
    assert split_key("\x1b") == (None, "\x1b")
    assert split_key("\x1b[") == (None, "\x1b[")
    assert split_key("\x1b[5") == (None, "\x1b[5")


def test_key_reader_requires_tty(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO())
    with pytest.raises(RuntimeError):
        KeyReader()


# ---------------------------------------------------------------------------
# Real terminal (pty)

@pytest.fixture
def tty_pair():
    pty = pytest.importorskip("pty")
    master, slave = pty.openpty()
    reader = KeyReader(slave)
    yield master, reader
    reader.close()
    os.close(master)
    os.close(slave)


def test_escape_sequence_in_one_burst(tty_pair):
    master, reader = tty_pair
    os.write(master, b"\x1b[A")
    assert reader.read_key(timeout=0.5) == "UP"
    assert reader.read_key(timeout=0.05) is None


def test_burst_of_keys_is_read_in_order(tty_pair):
    master, reader = tty_pair
    os.write(master, b"j\x1b[Bk\x1b[H\x1b[4~G")
    keys = [reader.read_key(timeout=0.5) for _ in range(6)]
    assert keys == ["j", "DOWN", "k", "HOME", "END", "G"]
    assert reader.read_key(timeout=0.05) is None


def test_lone_escape_and_utf8(tty_pair):
    master, reader = tty_pair
    os.write(master, b"\x1b")
    assert reader.read_key(timeout=0.5) == "ESC"
    os.write(master, "é".encode("utf-8"))
    assert reader.read_key(timeout=0.5) == "é"


def test_regular_file_is_not_a_tty(tmp_path):
    with open(tmp_path / "keys.txt", "wb") as f:
        with pytest.raises(RuntimeError):
            KeyReader(f.fileno())
