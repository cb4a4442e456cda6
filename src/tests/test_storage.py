# src/tests/test_storage.py
import pytest

from src.game.storage import MemoryStore, JsonFileStore, parse_int


def test_memory_store_stringifies():
    store = MemoryStore()
    assert store.get("bestScore") is None
    store.set("bestScore", 7)
    assert store.get("bestScore") == "7"


def test_json_store_round_trip_between_instances(tmp_path):
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set("bestScore", 12)
    assert JsonFileStore(path).get("bestScore") == "12"


def test_json_store_corrupt_file_reads_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)
    assert store.get("bestScore") is None
    store.set("bestScore", 3)
    assert store.get("bestScore") == "3"


def test_json_store_non_object_reads_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonFileStore(path).get("bestScore") is None


def test_parse_int():
    assert parse_int(None) == 0
    assert parse_int("") == 0
    assert parse_int("abc") == 0
    assert parse_int("-4") == 0
    assert parse_int(" 9 ") == 9


def test_json_store_set_leaves_no_temp_files(tmp_path):
    path = tmp_path / "store.json"
    store = JsonFileStore(path)
    store.set("bestScore", 1)
    store.set("bestScore", 2)
    assert store.get("bestScore") == "2"
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_json_store_failed_write_keeps_previous_value(tmp_path, monkeypatch):
    import src.game.storage as storage

    path = tmp_path / "store.json"
    store = JsonFileStore(path)
    store.set("bestScore", 5)

    def broken_dumps(*args, **kwargs):
        raise RuntimeError("disk went away")

    monkeypatch.setattr(storage.json, "dumps", broken_dumps)
    with pytest.raises(RuntimeError):
        store.set("bestScore", 9)
    monkeypatch.undo()

    assert JsonFileStore(path).get("bestScore") == "5"
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]
