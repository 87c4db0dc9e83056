#!/usr/bin/env python3
"""
Selection and scroll-window arithmetic for the list view.

No rendering here. `selected` is an ordinal in the *filtered* rows, the
list view translates it to an exercise index when it needs one.

Invariants kept by every operation:
- `0 <= offset`, `offset <= n_rows - 1` (or 0 when there are no rows)
- a selection, if any, lies in `[0, n_rows)` and inside the window
  `[offset, offset + max_n_rows_to_display)` when the window isn't empty.
Navigation clamps at both ends, it never wraps around.
"""

from __future__ import annotations

from typing import Optional


class ScrollState:
    def __init__(self, n_rows: int, selected: Optional[int] = None, min_visible: int = 0) -> None:
        self._n_rows = max(0, int(n_rows))
        self._max_n_rows_to_display = max(0, int(min_visible))
        self._offset = 0
        if self._n_rows == 0 or selected is None:
            self._selected: Optional[int] = None
        else:
            self._selected = max(0, min(int(selected), self._n_rows - 1))
        self._update_offset()

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def selected(self) -> Optional[int]:
        return self._selected

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def max_n_rows_to_display(self) -> int:
        return self._max_n_rows_to_display

    def visible_range(self) -> range:
        """Ordinals of the rows inside the scroll window."""
        stop = min(self._n_rows, self._offset + self._max_n_rows_to_display)
        return range(self._offset, max(self._offset, stop))

    def _update_offset(self) -> None:
        global_max_offset = max(0, self._n_rows - self._max_n_rows_to_display)
        if self._selected is None:
            self._offset = min(self._offset, global_max_offset)
            return

        # An empty window still keeps the offset on the selection.
        min_offset = max(0, self._selected - max(0, self._max_n_rows_to_display - 1))
        max_offset = self._selected
        self._offset = min(max(self._offset, min_offset), max_offset, global_max_offset)

    def _set_selected(self, selected: int) -> None:
        self._selected = selected
        self._update_offset()

    def select_next(self) -> None:
        if self._selected is not None:
            self._set_selected(min(self._selected + 1, self._n_rows - 1))

    def select_previous(self) -> None:
        if self._selected is not None:
            self._set_selected(max(self._selected - 1, 0))

    def select_first(self) -> None:
        if self._n_rows > 0:
            self._set_selected(0)

    def select_last(self) -> None:
        if self._n_rows > 0:
            self._set_selected(self._n_rows - 1)

    def set_n_rows(self, n_rows: int) -> None:
        self._n_rows = max(0, int(n_rows))
        if self._n_rows == 0:
            self._selected = None
            self._offset = 0
            return
        # Rows coming back after an empty filter get a selection again.
        selected = 0 if self._selected is None else min(self._selected, self._n_rows - 1)
        self._set_selected(selected)

    def set_max_n_rows_to_display(self, max_n_rows_to_display: int) -> None:
        self._max_n_rows_to_display = max(0, int(max_n_rows_to_display))
        self._update_offset()
