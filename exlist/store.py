#!/usr/bin/env python3
"""
exlist.store

File-backed progress store: which exercises exist, which are done, and
which one is current.

Catalogue (TOML, usually `info.toml` next to the exercises):

    state_file = ".exlist-state.txt"      # optional
    originals_dir = ".exlist/originals"   # optional

    [[exercises]]
    name = "intro1"
    path = "exercises/00_intro/intro1.rs"

State file (plain text, rewritten on every change):

    DON'T EDIT THIS FILE!

    <current exercise name>

    <done exercise name>
    ...

Resetting an exercise copies its pristine version from `originals_dir`
(same relative path) over the working file.
"""

from __future__ import annotations

import logging
import os
import shutil
import tomllib
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import CatalogueError, StoreError
from .models import Exercise

logger = logging.getLogger(__name__)

STATE_FILE_HEADER = "DON'T EDIT THIS FILE!"
DEFAULT_STATE_FILE = ".exlist-state.txt"
DEFAULT_ORIGINALS_DIR = ".exlist/originals"


def load_catalogue(info_path: Path) -> dict:
    """Parse and validate the catalogue file, returning the raw TOML mapping."""
    try:
        with open(info_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise CatalogueError(f"Catalogue not found: {info_path}") from None
    except tomllib.TOMLDecodeError as e:
        raise CatalogueError(f"Invalid TOML in {info_path}: {e}") from e
    except OSError as e:
        raise CatalogueError(f"Failed to read {info_path}: {e}") from e

    entries = data.get("exercises")
    if not isinstance(entries, list) or not entries:
        raise CatalogueError(f"{info_path}: no [[exercises]] entries")

    seen = set()
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CatalogueError(f"{info_path}: exercise #{i + 1} is not a table")
        name, path = entry.get("name"), entry.get("path")
        if not isinstance(name, str) or not name:
            raise CatalogueError(f"{info_path}: exercise #{i + 1} has no name")
        if not isinstance(path, str) or not path:
            raise CatalogueError(f"{info_path}: exercise `{name}` has no path")
        if name in seen:
            raise CatalogueError(f"{info_path}: duplicate exercise name `{name}`")
        seen.add(name)
    return data


class ProgressStore:
    """Owns the exercise list, completion state and the current exercise."""

    def __init__(
        self,
        exercises: Iterable[Exercise],
        *,
        root: Path | str = ".",
        state_file: Optional[Path | str] = None,
        originals_dir: Optional[Path | str] = None,
        current_index: int = 0,
    ) -> None:
        self._exercises: List[Exercise] = list(exercises)
        if not self._exercises:
            raise CatalogueError("At least one exercise is required.")
        self.root = Path(root)
        self.state_file = self.root / (state_file or DEFAULT_STATE_FILE)
        self.originals_dir = self.root / (originals_dir or DEFAULT_ORIGINALS_DIR)
        self._current = max(0, min(int(current_index), len(self._exercises) - 1))
        self._by_name: Dict[str, int] = {ex.name: i for i, ex in enumerate(self._exercises)}

    @classmethod
    def from_catalogue(cls, info_path: Path | str) -> "ProgressStore":
        info_path = Path(info_path)
        data = load_catalogue(info_path)
        exercises = [Exercise(name=e["name"], path=e["path"]) for e in data["exercises"]]
        store = cls(
            exercises,
            root=info_path.parent,
            state_file=data.get("state_file"),
            originals_dir=data.get("originals_dir"),
        )
        store.load_state()
        logger.info("Loaded %d exercises from %s", len(exercises), info_path)
        return store

    # -----------------------------
    # Read side
    # -----------------------------
    def exercises(self) -> Sequence[Exercise]:
        return self._exercises

    def current_exercise_index(self) -> int:
        return self._current

    def current_exercise(self) -> Exercise:
        return self._exercises[self._current]

    def n_done(self) -> int:
        return sum(1 for ex in self._exercises if ex.done)

    # -----------------------------
    # State file
    # -----------------------------
    def load_state(self) -> None:
        """Apply the state file, if there is one. Unknown names are skipped."""
        try:
            text = self.state_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No state file at %s, starting fresh", self.state_file)
            return
        except OSError as e:
            raise StoreError(f"Failed to read the state file {self.state_file}: {e}") from e

        lines = text.splitlines()
        if not lines or lines[0].strip() != STATE_FILE_HEADER:
            logger.warning("Ignoring state file %s with an unexpected header", self.state_file)
            return

        current_name = lines[2].strip() if len(lines) > 2 else ""
        for ex in self._exercises:
            ex.done = False
        for name in (ln.strip() for ln in lines[4:]):
            if not name:
                continue
            ind = self._by_name.get(name)
            if ind is None:
                logger.warning("State file lists unknown exercise `%s`", name)
                continue
            self._exercises[ind].done = True

        ind = self._by_name.get(current_name)
        if ind is None:
            ind = next((i for i, ex in enumerate(self._exercises) if not ex.done), 0)
        self._current = ind

    def write_state(self) -> None:
        lines = [STATE_FILE_HEADER, "", self.current_exercise().name, ""]
        lines.extend(ex.name for ex in self._exercises if ex.done)
        tmp = self.state_file.with_name(self.state_file.name + ".tmp")
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text("\n".join(lines) + "\n", encoding="utf-8")
            os.replace(tmp, self.state_file)
        except OSError as e:
            raise StoreError(f"Failed to write the state file {self.state_file}: {e}") from e
        logger.debug("State written to %s", self.state_file)

    # -----------------------------
    # Mutations
    # -----------------------------
    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._exercises):
            raise StoreError(f"Exercise index {index} out of range (0..{len(self._exercises) - 1})")

    def set_current_exercise_index(self, index: int) -> None:
        self._check_index(index)
        self._current = index
        self.write_state()
        logger.info("Current exercise: %s", self._exercises[index].name)

    def set_done(self, index: int, done: bool = True) -> None:
        """Mark an exercise done (or pending again) and write the state.

        The list never calls this; the exercise runner does once a solution
        passes.
        """
        self._check_index(index)
        self._exercises[index].done = done
        self.write_state()

    def reset_exercise_by_index(self, index: int) -> str:
        """Restore the exercise file from its original and mark it pending.

        Returns the exercise name.
        """
        self._check_index(index)
        exercise = self._exercises[index]
        original = self.originals_dir / exercise.path
        target = self.root / exercise.path
        if not original.is_file():
            raise StoreError(f"No original found for `{exercise.name}` at {original}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(original, target)
        except OSError as e:
            raise StoreError(f"Failed to reset `{exercise.name}`: {e}") from e

        exercise.done = False
        self.write_state()
        logger.info("Reset exercise %s (%s)", exercise.name, target)
        return exercise.name
