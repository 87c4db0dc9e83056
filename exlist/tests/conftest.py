from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence

import pytest

from exlist.models import Exercise

OSC_LINK_RE = re.compile(r"\x1b\]8;;.*?\x1b\\")
CSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
LINE_BREAK = "\x1b[K\x1b[1E"


class FakeStore:
    """In-memory stand-in for ProgressStore that records mutations."""

    def __init__(
        self,
        done_flags: Sequence[bool],
        current: int = 0,
        names: Sequence[str] | None = None,
        root: Path | str = ".",
    ):
        self.root = Path(root)
        names = list(names) if names is not None else [f"ex{i}" for i in range(len(done_flags))]
        self._exercises = [
            Exercise(name=name, path=f"missing/{name}.rs", done=done) for name, done in zip(names, done_flags)
        ]
        self.current = current
        self.calls: List[tuple] = []

    def exercises(self):
        return self._exercises

    def current_exercise_index(self):
        return self.current

    def n_done(self):
        return sum(1 for ex in self._exercises if ex.done)

    def reset_exercise_by_index(self, index):
        self.calls.append(("reset", index))
        self._exercises[index].done = False
        return self._exercises[index].name

    def set_current_exercise_index(self, index):
        self.calls.append(("current", index))
        self.current = index


def parse_screen(raw: str) -> List[str]:
    """Turn one drawn frame into the plain text of each screen line."""
    text = raw.replace(LINE_BREAK, "\n")
    text = OSC_LINK_RE.sub("", text)
    text = CSI_RE.sub("", text)
    return text.split("\n")


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def screen():
    return parse_screen


@pytest.fixture
def catalogue(tmp_path: Path) -> Path:
    """A small on-disk curriculum: three exercises with pristine originals."""
    names = ["intro1", "vars1", "vars2"]
    lines = []
    for name in names:
        rel = f"exercises/{name}.rs"
        (tmp_path / "exercises").mkdir(exist_ok=True)
        (tmp_path / rel).write_text(f"// edited {name}\n", encoding="utf-8")
        original = tmp_path / ".exlist" / "originals" / rel
        original.parent.mkdir(parents=True, exist_ok=True)
        original.write_text(f"// original {name}\n", encoding="utf-8")
        lines.append(f'[[exercises]]\nname = "{name}"\npath = "{rel}"\n')
    info = tmp_path / "info.toml"
    info.write_text("\n".join(lines), encoding="utf-8")
    return info
