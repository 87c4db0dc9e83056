#!/usr/bin/env python3
"""
exlist CLI

- `list` opens the interactive exercise list (needs a TTY).
- `show` prints the (optionally filtered) exercise table without the TUI,
  or JSON with `-j`.

The catalogue defaults to `$EXLIST_INFO`, then `./info.toml`.
Logging goes to a file only (`-l`), the list owns the screen.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from .errors import ExlistError
from .list_view import filtered_rows
from .models import Filter
from .progress import render_progress_text
from .session import run_list
from .store import ProgressStore

LOG = logging.getLogger("exlist")

_THEME = Theme(
    {
        "ui.info": "cyan",
        "ui.success": "green bold",
        "ui.warn": "yellow bold",
        "ui.error": "red bold",
        "ui.header": "bold blue",
        "ui.dim": "dim",
    }
)

console = Console(theme=_THEME, highlight=False)
err_console = Console(theme=_THEME, highlight=False, stderr=True)

DEFAULT_INFO = "info.toml"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    LOG.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(LOG.handlers):
        LOG.removeHandler(handler)
        handler.close()
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, mode="a", encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        LOG.addHandler(fh)
    else:
        LOG.addHandler(logging.NullHandler())
    LOG.propagate = False


def _info_path(args: argparse.Namespace) -> Path:
    return Path(args.info or os.environ.get("EXLIST_INFO") or DEFAULT_INFO)


def _ensure_tty() -> None:
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        err_console.print(
            "An interactive terminal (TTY) is required for the list.\n"
            "Run this command directly in a terminal, or use `exlist show`.",
            style="ui.error",
        )
        raise SystemExit(2)


# ---------------------------------------------------------------------------
# Commands

def cmd_list(args: argparse.Namespace) -> int:
    _ensure_tty()
    store = ProgressStore.from_catalogue(_info_path(args))
    store = run_list(store)
    current = store.current_exercise()
    console.print(f"Current exercise: [bold]{current.name}[/bold] ({current.path})", style="ui.info")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    store = ProgressStore.from_catalogue(_info_path(args))
    filter_ = Filter(args.filter)
    exercises = store.exercises()
    rows = list(filtered_rows(filter_, exercises))
    current_ind = store.current_exercise_index()

    if args.json:
        payload = {
            "filter": filter_.value,
            "current": store.current_exercise().name,
            "done": store.n_done(),
            "total": len(exercises),
            "exercises": [
                {"index": ind, "name": ex.name, "path": ex.path, "done": ex.done, "current": ind == current_ind}
                for ind, ex in rows
            ],
        }
        print(json.dumps(payload, indent=2))
        return 0

    table = Table(title=f"Exercises ({filter_.value})", header_style="ui.header")
    table.add_column("Current")
    table.add_column("State")
    table.add_column("Name")
    table.add_column("Path", style="blue")
    for ind, ex in rows:
        table.add_row(
            ">>>>>>>" if ind == current_ind else "",
            "[green]DONE[/green]" if ex.done else "[yellow]PENDING[/yellow]",
            ex.name,
            ex.path,
        )
    console.print(table)
    console.print(render_progress_text(store.n_done(), len(exercises), console.width), markup=False)
    return 0


# ---------------------------------------------------------------------------
# ARGPARSE

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="exlist", description="Interactive exercise progress list")
    p.add_argument("-l", "--log-file", default=None, help="Append logs to this file.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug-level logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser):
        sp.add_argument("-i", "--info", default=None, help=f"Catalogue file (default: $EXLIST_INFO or {DEFAULT_INFO}).")

    sp = sub.add_parser("list", help="Open the interactive exercise list.")
    add_common(sp)
    sp.set_defaults(func=cmd_list)

    sp = sub.add_parser("show", help="Print the exercise table without the interactive list.")
    add_common(sp)
    sp.add_argument("-f", "--filter", choices=[f.value for f in Filter], default=Filter.ALL.value)
    sp.add_argument("-j", "--json", action="store_true", help="Print JSON instead of a table.")
    sp.set_defaults(func=cmd_show)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    try:
        return int(args.func(args))
    except ExlistError as e:
        LOG.error("%s", e)
        err_console.print(f"Error: {e}", style="ui.error", markup=False)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
