#!/usr/bin/env python3
"""
Full-screen, filterable exercise list.

`ListView` draws one frame per `draw()` call and turns navigation into
actions on the progress store. Which key triggers what is decided by the
caller (see `exlist.session`).

Screen layout, top to bottom:

    header          "  Current  State    Name ... Path"
    rows            filtered exercises in the scroll window
    padding         blank lines so the footer never moves
    separator
    progress bar
    separator
    help / message  one line, two on narrow terminals

The footer is dropped when the terminal is too short for it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Protocol, Sequence, TextIO, Tuple

from rich.cells import cell_len

from .errors import InvalidSelection
from .models import Exercise, Filter
from .progress import progress_bar
from .scroll_state import ScrollState
from .term import (
    BEGIN_SYNCHRONIZED_UPDATE,
    END_SYNCHRONIZED_UPDATE,
    RESET,
    UNDERLINE,
    bg_rgb,
    fg,
    move_to,
    next_ln,
    terminal_file_link,
)
from .writer import MaxLenWriter

logger = logging.getLogger(__name__)

WIDE_FOOTER_THRESHOLD = 95
HEADER_HEIGHT = 1
# 2 separators, 1 progress bar, 1-2 help lines.
FOOTER_HEIGHT = 4
MIN_VISIBLE_ROWS = 5
NAME_COL_TITLE_LEN = len("Name")

SELECTED_BG = (40, 40, 40)
# Two columns wide.
SELECTION_GLYPH = "🦀"
SEPARATOR_GLYPH = "─"

HELP_NAVIGATION = "↓/j ↑/k home/g end/G | <c>ontinue at | <r>eset exercise"


class ProgressStoreLike(Protocol):
    # Exercise paths are relative to this directory.
    root: Path

    def exercises(self) -> Sequence[Exercise]: ...

    def current_exercise_index(self) -> int: ...

    def n_done(self) -> int: ...

    def reset_exercise_by_index(self, index: int) -> str: ...

    def set_current_exercise_index(self, index: int) -> None: ...


def filtered_rows(filter_: Filter, exercises: Sequence[Exercise]) -> Iterator[Tuple[int, Exercise]]:
    """Yield `(absolute index, exercise)` for every exercise matching `filter_`."""
    return ((ind, exercise) for ind, exercise in enumerate(exercises) if filter_.matches(exercise))


def count_rows(filter_: Filter, exercises: Sequence[Exercise]) -> int:
    if filter_ is Filter.ALL:
        return len(exercises)
    return sum(1 for _ in filtered_rows(filter_, exercises))


def filtered_to_absolute_index(filter_: Filter, exercises: Sequence[Exercise], ordinal: int) -> int:
    """Translate a row ordinal of the filtered view into an exercise index.

    Raises `InvalidSelection` if the filtered view has no row `ordinal`.
    """
    if filter_ is Filter.ALL:
        return ordinal
    if ordinal >= 0:
        for n, (ind, _) in enumerate(filtered_rows(filter_, exercises)):
            if n == ordinal:
                return ind
    raise InvalidSelection(ordinal, filter_.name)


class ListView:
    def __init__(self, store: ProgressStoreLike, width: int, height: int) -> None:
        # Footer message, shown instead of the help line when not empty.
        self.message = ""
        self.store = store

        exercises = store.exercises()
        self.name_col_width = max([NAME_COL_TITLE_LEN] + [cell_len(ex.name) for ex in exercises])
        self.filter = Filter.ALL
        self.scroll_state = ScrollState(len(exercises), store.current_exercise_index(), MIN_VISIBLE_ROWS)

        # Set by `set_term_size`.
        self.term_width = 0
        self.term_height = 0
        self.separator_line = ""
        self.narrow_term = False
        self.show_footer = True

        self.set_term_size(width, height)

    # -----------------------------
    # Layout
    # -----------------------------
    def set_term_size(self, width: int, height: int) -> None:
        self.term_width = max(0, int(width))
        self.term_height = max(0, int(height))

        if self.term_height == 0:
            return

        # The help footer is shorter when nothing is selected.
        self.narrow_term = self.term_width < WIDE_FOOTER_THRESHOLD and self.scroll_state.selected is not None

        footer_height = FOOTER_HEIGHT + int(self.narrow_term)
        self.show_footer = self.term_height > HEADER_HEIGHT + footer_height

        if self.show_footer:
            self.separator_line = SEPARATOR_GLYPH * self.term_width

        self.scroll_state.set_max_n_rows_to_display(
            max(0, self.term_height - HEADER_HEIGHT - (footer_height if self.show_footer else 0))
        )

    # -----------------------------
    # Rendering
    # -----------------------------
    def _line_writer(self, out: TextIO) -> MaxLenWriter:
        return MaxLenWriter(out, self.term_width)

    def _draw_rows(self, out: TextIO, rows: Iterator[Tuple[int, Exercise]]) -> int:
        current_ind = self.store.current_exercise_index()
        window = self.scroll_state.visible_range()
        n_displayed_rows = 0

        for n, (exercise_ind, exercise) in enumerate(rows):
            if n < window.start:
                continue
            if n >= window.stop:
                break

            writer = self._line_writer(out)

            if self.scroll_state.selected == n:
                out.write(bg_rgb(*SELECTED_BG))
                if writer.remaining() >= 2:
                    writer.add_to_len(2)
                    out.write(SELECTION_GLYPH)
                else:
                    writer.write_ascii("  ")
            else:
                writer.write_ascii("  ")

            if exercise_ind == current_ind:
                out.write(fg("red"))
                writer.write_ascii(">>>>>>>  ")
            else:
                writer.write_ascii("         ")

            if exercise.done:
                out.write(fg("green"))
                writer.write_ascii("DONE     ")
            else:
                out.write(fg("yellow"))
                writer.write_ascii("PENDING  ")

            out.write(fg("default"))

            writer.write_str(exercise.name)
            writer.write_ascii(" " * (self.name_col_width + 2 - cell_len(exercise.name)))

            terminal_file_link(writer, exercise.path, "blue", self.store.root / exercise.path)

            next_ln(out)
            out.write(RESET)
            n_displayed_rows += 1

        return n_displayed_rows

    def _draw_help(self, out: TextIO) -> None:
        writer = self._line_writer(out)
        if self.scroll_state.selected is not None:
            writer.write_str(HELP_NAVIGATION)
            if self.narrow_term:
                next_ln(out)
                writer = self._line_writer(out)
                writer.write_ascii("filter ")
            else:
                writer.write_ascii(" | filter ")
        else:
            # Nothing selected (and nothing shown), so only the filter and quit.
            writer.write_ascii("filter ")

        if self.filter is Filter.DONE:
            out.write(fg("magenta"))
            out.write(UNDERLINE)
            writer.write_ascii("<d>one")
            out.write(RESET)
            writer.write_ascii("/<p>ending")
        elif self.filter is Filter.PENDING:
            writer.write_ascii("<d>one/")
            out.write(fg("magenta"))
            out.write(UNDERLINE)
            writer.write_ascii("<p>ending")
            out.write(RESET)
        else:
            writer.write_ascii("<d>one/<p>ending")

        writer.write_ascii(" | <q>uit list")

    def draw(self, out: TextIO) -> None:
        """Render one full frame to `out` and flush it.

        Does nothing while the terminal reports a height of 0. Write errors
        from `out` propagate.
        """
        if self.term_height == 0:
            return

        out.write(BEGIN_SYNCHRONIZED_UPDATE)
        out.write(move_to(0, 0))

        # Header
        writer = self._line_writer(out)
        writer.write_ascii("  Current  State    Name")
        writer.write_ascii(" " * (self.name_col_width - 2))
        writer.write_ascii("Path")
        next_ln(out)

        # Rows
        exercises = self.store.exercises()
        n_displayed_rows = self._draw_rows(out, filtered_rows(self.filter, exercises))

        for _ in range(self.scroll_state.max_n_rows_to_display - n_displayed_rows):
            next_ln(out)

        if self.show_footer:
            out.write(self.separator_line)
            next_ln(out)

            progress_bar(self._line_writer(out), self.store.n_done(), len(exercises), self.term_width)
            next_ln(out)

            out.write(self.separator_line)
            next_ln(out)

            if self.message:
                writer = self._line_writer(out)
                out.write(fg("magenta"))
                writer.write_str(self.message)
                out.write(RESET)
                next_ln(out)
            else:
                self._draw_help(out)

            next_ln(out)

        out.write(END_SYNCHRONIZED_UPDATE)
        out.flush()

    # -----------------------------
    # Filter
    # -----------------------------
    def _update_rows(self) -> None:
        self.scroll_state.set_n_rows(count_rows(self.filter, self.store.exercises()))

    def set_filter(self, filter_: Filter) -> None:
        self.filter = filter_
        self._update_rows()

    def toggle_filter(self, filter_: Filter) -> None:
        """Enable `filter_`, or go back to showing everything if it is already on."""
        name = filter_.name
        key = name[0].lower()
        if self.filter is filter_:
            self.set_filter(Filter.ALL)
            self.message += f"Disabled filter {name}"
        else:
            self.set_filter(filter_)
            self.message += f"Enabled filter {name} │ Press {key} again to disable the filter"

    # -----------------------------
    # Navigation
    # -----------------------------
    def select_next(self) -> None:
        self.scroll_state.select_next()

    def select_previous(self) -> None:
        self.scroll_state.select_previous()

    def select_first(self) -> None:
        self.scroll_state.select_first()

    def select_last(self) -> None:
        self.scroll_state.select_last()

    # -----------------------------
    # Actions
    # -----------------------------
    def selected_to_absolute_index(self, ordinal: int) -> int:
        return filtered_to_absolute_index(self.filter, self.store.exercises(), ordinal)

    def reset_selected(self) -> None:
        selected = self.scroll_state.selected
        if selected is None:
            self.message += "Nothing selected to reset!"
            return

        exercise_ind = self.selected_to_absolute_index(selected)
        exercise_name = self.store.reset_exercise_by_index(exercise_ind)
        self._update_rows()
        self.message += f"The exercise `{exercise_name}` has been reset"
        logger.debug("Reset exercise %d (%s)", exercise_ind, exercise_name)

    def selected_to_current(self) -> bool:
        """Make the selected exercise the current one.

        Returns False (and leaves a message) when nothing is selected.
        """
        selected = self.scroll_state.selected
        if selected is None:
            self.message += "Nothing selected to continue at!"
            return False

        exercise_ind = self.selected_to_absolute_index(selected)
        self.store.set_current_exercise_index(exercise_ind)
        logger.debug("Continue at exercise %d", exercise_ind)
        return True
