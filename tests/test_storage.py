from __future__ import annotations

import json

import pytest

from core.errors import StorageError
from db.storage import JsonFileStorage
from db.store import InventoryStore


def test_missing_file_is_created_empty(storage_file):
    assert not storage_file.exists()

    InventoryStore(storage_file)

    assert storage_file.read_text(encoding="utf-8") == '{\n    "items": [],\n    "movements": []\n}\n'


def test_persisted_layout(storage_file, store, widget):
    store.create_item(widget)

    content = storage_file.read_text(encoding="utf-8")
    assert content.endswith("}\n")
    data = json.loads(content)
    assert set(data) == {"items", "movements"}
    assert set(data["items"][0]) == {
        "id", "name", "sku", "location", "quantity", "reorder_level", "created_at", "updated_at",
    }
    assert set(data["movements"][0]) == {"id", "type", "item_id", "quantity_change", "note", "created_at"}
    assert data["items"][0]["created_at"].endswith("+00:00")


def test_save_leaves_no_temp_files(storage_file, store, widget):
    item = store.create_item(widget)
    store.adjust_stock(item.id, 1)

    leftovers = [p.name for p in storage_file.parent.iterdir() if p.suffix == ".tmp"]
    assert leftovers == []


def test_non_ascii_text_is_kept_readable(storage_file, store, widget):
    store.create_item({**widget, "name": "Schraube Ø4"})

    assert "Schraube Ø4" in storage_file.read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        '{"items": {"a": 1}, "movements": []}',
        '{"items": [{"id": "x"}], "movements": []}',
    ],
)
def test_corrupt_file_raises_storage_error(storage_file, content):
    storage_file.parent.mkdir(parents=True)
    storage_file.write_text(content, encoding="utf-8")

    with pytest.raises(StorageError):
        InventoryStore(storage_file)


def test_missing_sections_default_to_empty(storage_file):
    storage_file.parent.mkdir(parents=True)
    storage_file.write_text("{}", encoding="utf-8")

    assert JsonFileStorage(storage_file).load() == ([], [])


def test_unwritable_directory_raises_storage_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(blocker / "inventory.json").ensure_exists()
