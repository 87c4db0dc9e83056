#!/usr/bin/env python3
from __future__ import annotations

import pytest

from exlist.errors import CatalogueError, StoreError
from exlist.store import STATE_FILE_HEADER, ProgressStore, load_catalogue


def test_from_catalogue_starts_fresh(catalogue):
    store = ProgressStore.from_catalogue(catalogue)
    assert [ex.name for ex in store.exercises()] == ["intro1", "vars1", "vars2"]
    assert store.n_done() == 0
    assert store.current_exercise_index() == 0
    assert store.state_file == catalogue.parent / ".exlist-state.txt"
    assert not store.state_file.exists()


def test_state_file_round_trip(catalogue):
    store = ProgressStore.from_catalogue(catalogue)
    store.set_done(0)
    store.set_current_exercise_index(1)

    text = store.state_file.read_text(encoding="utf-8")
    assert text == f"{STATE_FILE_HEADER}\n\nvars1\n\nintro1\n"

    again = ProgressStore.from_catalogue(catalogue)
    assert [ex.done for ex in again.exercises()] == [True, False, False]
    assert again.current_exercise().name == "vars1"


def test_unknown_names_in_state_are_skipped(catalogue):
    state = catalogue.parent / ".exlist-state.txt"
    state.write_text(f"{STATE_FILE_HEADER}\n\nbogus\n\nintro1\nghost\n", encoding="utf-8")

    store = ProgressStore.from_catalogue(catalogue)
    assert [ex.done for ex in store.exercises()] == [True, False, False]
    # Unknown current falls back to the first pending exercise.
    assert store.current_exercise_index() == 1


def test_state_with_bad_header_is_ignored(catalogue):
    state = catalogue.parent / ".exlist-state.txt"
    state.write_text("garbage\n\nvars2\n\nintro1\n", encoding="utf-8")

    store = ProgressStore.from_catalogue(catalogue)
    assert store.n_done() == 0
    assert store.current_exercise_index() == 0


def test_custom_state_file_location(catalogue):
    text = catalogue.read_text(encoding="utf-8")
    catalogue.write_text('state_file = "state/progress.txt"\n\n' + text, encoding="utf-8")

    store = ProgressStore.from_catalogue(catalogue)
    store.set_current_exercise_index(2)
    assert (catalogue.parent / "state" / "progress.txt").is_file()


def test_reset_restores_original_and_marks_pending(catalogue):
    store = ProgressStore.from_catalogue(catalogue)
    store.set_done(1)
    target = catalogue.parent / "exercises" / "vars1.rs"
    assert target.read_text(encoding="utf-8") == "// edited vars1\n"

    assert store.reset_exercise_by_index(1) == "vars1"
    assert target.read_text(encoding="utf-8") == "// original vars1\n"
    assert not store.exercises()[1].done
    assert "vars1" not in store.state_file.read_text(encoding="utf-8").splitlines()[4:]


def test_reset_without_original_fails_and_keeps_file(catalogue):
    store = ProgressStore.from_catalogue(catalogue)
    store.set_done(2)
    (catalogue.parent / ".exlist" / "originals" / "exercises" / "vars2.rs").unlink()

    with pytest.raises(StoreError):
        store.reset_exercise_by_index(2)
    assert (catalogue.parent / "exercises" / "vars2.rs").read_text(encoding="utf-8") == "// edited vars2\n"
    assert store.exercises()[2].done


def test_out_of_range_index(catalogue):
    store = ProgressStore.from_catalogue(catalogue)
    with pytest.raises(StoreError):
        store.set_current_exercise_index(3)
    with pytest.raises(StoreError):
        store.reset_exercise_by_index(-1)
    assert store.current_exercise_index() == 0


@pytest.mark.parametrize(
    "body",
    [
        "",
        "exercises = []\n",
        '[[exercises]]\nname = "a"\n',
        '[[exercises]]\npath = "a.rs"\n',
        '[[exercises]]\nname = "a"\npath = "a.rs"\n[[exercises]]\nname = "a"\npath = "b.rs"\n',
        "[[exercises]\n",
    ],
)
def test_bad_catalogue_is_rejected(tmp_path, body):
    info = tmp_path / "info.toml"
    info.write_text(body, encoding="utf-8")
    with pytest.raises(CatalogueError):
        load_catalogue(info)


def test_missing_catalogue(tmp_path):
    with pytest.raises(CatalogueError, match="not found"):
        ProgressStore.from_catalogue(tmp_path / "nope.toml")


def test_catalogue_error_is_a_store_error():
    assert issubclass(CatalogueError, StoreError)
