#!/usr/bin/env python3
"""
Lightweight exports for exlist.
"""

from .errors import ExlistError, InvalidSelection, StoreError, CatalogueError  # noqa: F401
from .models import Exercise, Filter  # noqa: F401
from .scroll_state import ScrollState  # noqa: F401
from .writer import MaxLenWriter  # noqa: F401
from .list_view import ListView, filtered_to_absolute_index  # noqa: F401
from .store import ProgressStore  # noqa: F401
from .session import run_list  # noqa: F401

__all__ = [
    "ExlistError",
    "InvalidSelection",
    "StoreError",
    "CatalogueError",
    "Exercise",
    "Filter",
    "ScrollState",
    "MaxLenWriter",
    "ListView",
    "filtered_to_absolute_index",
    "ProgressStore",
    "run_list",
]
