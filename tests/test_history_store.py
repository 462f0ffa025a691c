import logging
import os

import pytest

from history_store import (
    HISTORY_ENV_VAR,
    HISTORY_FILENAME,
    MAX_HISTORY,
    HistoryEntry,
    HistoryStore,
    history_path,
    load_history,
    save_history,
)


def test_missing_file_loads_empty(store):
    assert store.entries == ()
    assert len(store) == 0

def test_append_persists_immediately(store, history_file):
    store.append("1 + 1", "2")
    assert history_file.read_text(encoding="utf-8") == "1 + 1\t2"
    store.append("sqr(3)", "9")
    assert history_file.read_text(encoding="utf-8") == "1 + 1\t2\nsqr(3)\t9"

def test_round_trip_through_new_store(store, history_file):
    store.append("12 + 3", "15")
    store.append("√(2)", "1.4142135624")
    reloaded = HistoryStore.open(history_file)
    assert reloaded.entries == (
        HistoryEntry("12 + 3", "15"),
        HistoryEntry("√(2)", "1.4142135624"),
    )

def test_capacity_evicts_oldest(store):
    for i in range(MAX_HISTORY + 1):
        store.append(f"{i} + 0", str(i))
    assert len(store) == MAX_HISTORY
    assert store.entries[0] == HistoryEntry("1 + 0", "1")
    assert store.entries[-1] == HistoryEntry("10 + 0", "10")

def test_capacity_persisted(store, history_file):
    for i in range(15):
        store.append(f"{i} + 0", str(i))
    lines = history_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == MAX_HISTORY
    assert lines[0] == "5 + 0\t5"

def test_clear_truncates_file(store, history_file):
    store.append("1 + 1", "2")
    store.clear()
    assert store.entries == ()
    assert history_file.read_text(encoding="utf-8") == ""
    assert HistoryStore.open(history_file).entries == ()

def test_malformed_lines_are_skipped(history_file):
    history_file.write_text("1 + 1\t2\nno tab here\n\nsqr(2)\t4\n", encoding="utf-8")
    assert load_history(history_file) == [
        HistoryEntry("1 + 1", "2"),
        HistoryEntry("sqr(2)", "4"),
    ]

def test_split_at_first_tab(history_file):
    history_file.write_text("a\tb\tc", encoding="utf-8")
    assert load_history(history_file) == [HistoryEntry("a", "b\tc")]

def test_oversized_file_keeps_last_entries(history_file):
    history_file.write_text(
        "\n".join(f"{i} + 0\t{i}" for i in range(20)), encoding="utf-8")
    store = HistoryStore.open(history_file)
    assert len(store) == MAX_HISTORY
    assert store.entries[0].result == "10"

def test_undecodable_file_loads_empty(history_file, caplog):
    history_file.write_bytes(b"\xff\xfe\xfa\tbad")
    with caplog.at_level(logging.WARNING):
        assert load_history(history_file) == []
    assert "Could not read history" in caplog.text

def test_directory_in_place_of_file_loads_empty(temp_dir_fixture):
    assert load_history(temp_dir_fixture) == []

def test_unwritable_location_is_swallowed(temp_dir_fixture, caplog):
    blocker = temp_dir_fixture / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = HistoryStore(blocker / "calc_history.txt")
    with caplog.at_level(logging.WARNING):
        store.append("1 + 1", "2")
    assert store.entries == (HistoryEntry("1 + 1", "2"),)
    assert "Could not save history" in caplog.text

def test_save_history_leaves_no_temp_files(temp_dir_fixture, history_file):
    assert save_history(history_file, [HistoryEntry("1 + 1", "2")]) is True
    assert sorted(os.listdir(temp_dir_fixture)) == [history_file.name]

def test_memory_only_store_writes_nothing(temp_dir_fixture):
    store = HistoryStore()
    store.append("1 + 1", "2")
    store.clear()
    assert store.path is None
    assert os.listdir(temp_dir_fixture) == []

def test_entries_snapshot_is_immutable(store):
    store.append("1 + 1", "2")
    snapshot = store.entries
    store.append("2 + 2", "4")
    assert len(snapshot) == 1
    with pytest.raises(AttributeError):
        snapshot[0].result = "3"

def test_invalid_capacity():
    with pytest.raises(ValueError):
        HistoryStore(capacity=0)

def test_small_capacity(history_file):
    store = HistoryStore(history_file, capacity=2)
    for i in range(3):
        store.append(str(i), str(i))
    assert [e.result for e in store.entries] == ["1", "2"]

def test_history_path_default(monkeypatch):
    monkeypatch.delenv(HISTORY_ENV_VAR, raising=False)
    path = history_path()
    assert path.name == HISTORY_FILENAME
    assert path.parent.is_dir()

def test_history_path_env_override(monkeypatch, history_file):
    monkeypatch.setenv(HISTORY_ENV_VAR, str(history_file))
    assert history_path() == history_file

def test_open_uses_default_path(monkeypatch, history_file):
    monkeypatch.setenv(HISTORY_ENV_VAR, str(history_file))
    history_file.write_text("1 + 1\t2", encoding="utf-8")
    store = HistoryStore.open()
    assert store.path == history_file
    assert store.entries == (HistoryEntry("1 + 1", "2"),)

def test_history_path_follows_launched_script(monkeypatch, temp_dir_fixture):
    monkeypatch.delenv(HISTORY_ENV_VAR, raising=False)
    script = temp_dir_fixture / "bin" / "calculadora"
    monkeypatch.setattr("sys.argv", [str(script)])
    assert history_path() == script.resolve().parent / HISTORY_FILENAME

def test_history_path_without_script_uses_cwd(monkeypatch, temp_dir_fixture):
    monkeypatch.delenv(HISTORY_ENV_VAR, raising=False)
    monkeypatch.chdir(temp_dir_fixture)
    monkeypatch.setattr("sys.argv", [""])
    assert history_path() == temp_dir_fixture.resolve() / HISTORY_FILENAME
