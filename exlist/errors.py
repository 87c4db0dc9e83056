#!/usr/bin/env python3
"""
Exception types raised by exlist.

Terminal write failures are not wrapped: they surface as the `OSError`
raised by the output stream.
"""

from __future__ import annotations


class ExlistError(Exception):
    """Base class for every error exlist raises on purpose."""


class InvalidSelection(ExlistError):
    """A row ordinal of the filtered view has no matching exercise."""

    def __init__(self, ordinal: int, filter_name: str) -> None:
        super().__init__(f"Invalid selection index {ordinal} (filter: {filter_name})")
        self.ordinal = ordinal
        self.filter_name = filter_name


class StoreError(ExlistError):
    """The progress store could not read or apply a change."""


class CatalogueError(StoreError):
    """The exercise catalogue is missing or malformed."""
