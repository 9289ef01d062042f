"""
Seed a handful of demo warehouse items.

Run locally (from backend/):
  python -m scripts.seed_inventory

It uses the same INVENTORY_STORAGE_FILE env var as the backend (dotenv supported by core.config).
Items whose SKU already exists are skipped, so the script can be re-run safely.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional

from core.config import settings
from core.logging_setup import setup_logging
from db.store import InventoryStore


@dataclass(frozen=True)
class SeedItem:
    name: str
    sku: str
    location: str
    quantity: int
    reorder_level: Optional[int] = None


SEED_ITEMS: list[SeedItem] = [
    SeedItem(name="Widget", sku="W-1", location="A1", quantity=10, reorder_level=5),
    SeedItem(name="Gadget", sku="G-1", location="A2", quantity=25, reorder_level=10),
    SeedItem(name="Sprocket", sku="S-1", location="B1", quantity=0),
    SeedItem(name="Cable (2m)", sku="C-2M", location="C4", quantity=120, reorder_level=40),
]


def seed(store: InventoryStore) -> int:
    existing = {item.sku for item in store.list_items()}
    created = 0
    for seed_item in SEED_ITEMS:
        if seed_item.sku in existing:
            continue
        store.create_item(
            {
                "name": seed_item.name,
                "sku": seed_item.sku,
                "location": seed_item.location,
                "quantity": seed_item.quantity,
                "reorder_level": seed_item.reorder_level,
            }
        )
        created += 1
    return created


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--storage-file", default=str(settings.storage_file))
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)
    store = InventoryStore(args.storage_file)
    created = seed(store)
    print(f"[seed_inventory] created_items={created} storage={store.storage_file}")


if __name__ == "__main__":
    main()
