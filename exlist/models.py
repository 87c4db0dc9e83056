#!/usr/bin/env python3
from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass
class Exercise:
    """One row of the list. Its absolute index is its position in the store."""

    name: str
    path: str
    done: bool = False


class Filter(enum.Enum):
    ALL = "all"
    DONE = "done"
    PENDING = "pending"

    def matches(self, exercise: Exercise) -> bool:
        if self is Filter.DONE:
            return exercise.done
        if self is Filter.PENDING:
            return not exercise.done
        return True
