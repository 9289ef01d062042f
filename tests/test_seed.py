from __future__ import annotations

from scripts.seed_inventory import SEED_ITEMS, main, seed


def test_seed_is_idempotent(store):
    assert seed(store) == len(SEED_ITEMS)
    assert seed(store) == 0

    initial = [m for m in store.list_movements() if m.type == "initial"]
    assert len(initial) == len(SEED_ITEMS)


def test_seed_cli_writes_storage_file(tmp_path, capsys):
    target = tmp_path / "seeded.json"

    main(["--storage-file", str(target)])

    assert target.exists()
    assert "created_items=4" in capsys.readouterr().out
