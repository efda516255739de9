from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from portfolio_admin.infrastructure.storage import JsonRecordStore, LocalContentStorage
from portfolio_admin.shared.errors import StorageError


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    store = JsonRecordStore(tmp_path / "nested" / "users.json", key="id")

    assert store.load() == []
    assert store.get("1") is None


@pytest.mark.parametrize("payload", ["", "{broken", '{"id": "1"}', "[1, 2, 3]"])
def test_malformed_payloads_read_as_empty(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "users.json"
    path.write_text(payload, encoding="utf-8")

    assert JsonRecordStore(path, key="id").load() == []


def test_undecodable_file_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "users.json"
    path.write_bytes(b"\xff\xfe\x00[")

    assert JsonRecordStore(path, key="id").load() == []


def test_put_replaces_record_with_same_key(tmp_path: Path) -> None:
    path = tmp_path / "users.json"
    store = JsonRecordStore(path, key="id")

    store.put({"id": "1", "name": "first"})
    store.put({"id": "2", "name": "second"})
    store.put({"id": "1", "name": "renamed"})

    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"id": "1", "name": "renamed"},
        {"id": "2", "name": "second"},
    ]
    assert [p.name for p in tmp_path.iterdir()] == ["users.json"]


def test_delete_and_delete_where(tmp_path: Path) -> None:
    store = JsonRecordStore(tmp_path / "sessions.json", key="token")
    for idx in range(4):
        store.put({"token": f"t{idx}", "n": idx})

    assert store.delete("t0") is True
    assert store.delete("t0") is False
    assert store.delete_where(lambda record: record["n"] >= 2) == 2
    assert [r["token"] for r in store.list_by()] == ["t1"]


def test_list_by_filters(tmp_path: Path) -> None:
    store = JsonRecordStore(tmp_path / "users.json", key="id")
    store.put({"id": "1", "role": "admin"})
    store.put({"id": "2", "role": "user"})

    assert store.list_by(lambda record: record["role"] == "admin") == [{"id": "1", "role": "admin"}]


def test_concurrent_transactions_do_not_lose_updates(tmp_path: Path) -> None:
    path = tmp_path / "counter.json"
    writers = [JsonRecordStore(path, key="id") for _ in range(4)]
    writers[0].put({"id": "c", "value": 0})

    def bump(store: JsonRecordStore) -> None:
        for _ in range(25):
            with store.transaction() as records:
                records[0]["value"] += 1

    threads = [threading.Thread(target=bump, args=(w,)) for w in writers]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert writers[0].get("c") == {"id": "c", "value": 100}


def test_write_failure_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    store = JsonRecordStore(blocker / "users.json", key="id")

    with pytest.raises(StorageError) as excinfo:
        store.put({"id": "1"})

    assert excinfo.value.code == "storage_failure"


def test_content_storage_lists_and_deletes(tmp_path: Path) -> None:
    (tmp_path / "b.mdx").write_text("b", encoding="utf-8")
    (tmp_path / "a.mdx").write_text("a", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("n", encoding="utf-8")
    (tmp_path / "sub.mdx").mkdir()
    storage = LocalContentStorage(tmp_path)

    assert storage.list_files(".mdx") == ["a.mdx", "b.mdx"]
    assert storage.exists("a.mdx") is True

    storage.delete("a.mdx")

    assert storage.exists("a.mdx") is False
    assert (tmp_path / "notes.txt").exists()


def test_content_storage_refuses_paths_outside_root(tmp_path: Path) -> None:
    root = tmp_path / "content"
    root.mkdir()
    (tmp_path / "secret.mdx").write_text("s", encoding="utf-8")
    storage = LocalContentStorage(root)

    with pytest.raises(ValueError):
        storage.exists("../secret.mdx")
    with pytest.raises(ValueError):
        storage.delete("../secret.mdx")
    assert (tmp_path / "secret.mdx").exists()


def test_content_storage_missing_root_lists_nothing(tmp_path: Path) -> None:
    assert LocalContentStorage(tmp_path / "absent").list_files(".mdx") == []
