"""
InventoryStore: the file-backed warehouse inventory.

Items and the append-only movement log are loaded once, held in memory and
rewritten to disk in full after every mutation. New state is persisted before
it replaces the in-memory state, so a failed write leaves the store unchanged.
"""

import logging
import os
import secrets
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from core.errors import NotFoundError, StorageError, ValidationError, field_errors
from db.inventory import InventoryItem, InventoryMovement
from db.storage import JsonFileStorage
from schemas.inventory import ItemCreate, ItemUpdate

logger = logging.getLogger("inventory.store")

INITIAL_NOTE = "Initial stock level"
DEFAULT_INBOUND_NOTE = "Restock"
DEFAULT_OUTBOUND_NOTE = "Dispatch"


def _generate_id() -> str:
    return secrets.token_hex(8)


def _now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


@dataclass(frozen=True)
class StockAdjustment:
    item: InventoryItem
    movement: InventoryMovement


def _validate(model, payload: Mapping[str, Any]):
    if not isinstance(payload, Mapping):
        raise ValidationError({"body": "Request body must be valid JSON object."})
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc.errors())) from None


class InventoryStore:
    def __init__(self, storage_file: os.PathLike):
        self._storage = JsonFileStorage(storage_file)
        self._lock = threading.Lock()
        self._storage.ensure_exists()
        self._items, self._movements = self._load()
        logger.info(
            "Loaded %d items and %d movements from %s",
            len(self._items), len(self._movements), self._storage.path,
        )

    @property
    def storage_file(self):
        return self._storage.path

    def _load(self) -> Tuple[List[InventoryItem], List[InventoryMovement]]:
        items, movements = self._storage.load()
        try:
            return (
                [InventoryItem.from_record(r) for r in items],
                [InventoryMovement.from_record(r) for r in movements],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise StorageError("Storage file is corrupted.") from exc

    def _commit(self, items: List[InventoryItem], movements: List[InventoryMovement]) -> None:
        """Persist the new state, then make it current. Caller holds the lock."""
        self._storage.save([i.to_schema for i in items], [m.to_schema for m in movements])
        self._items = items
        self._movements = movements

    def _index_of(self, item_id: str) -> int:
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                return idx
        raise NotFoundError(item_id)

    # ---- reads ----

    def list_items(self) -> List[InventoryItem]:
        """All items ordered by SKU."""
        return [replace(i) for i in sorted(self._items, key=lambda i: i.sku)]

    def get_item(self, item_id: str) -> InventoryItem:
        return replace(self._items[self._index_of(item_id)])

    def list_movements(self) -> List[InventoryMovement]:
        """Movement history, newest first. Equal timestamps keep the latest recorded first."""
        return sorted(reversed(self._movements), key=lambda m: m.created_at, reverse=True)

    # ---- writes ----

    def create_item(self, payload: Mapping[str, Any]) -> InventoryItem:
        data: ItemCreate = _validate(ItemCreate, payload)
        now = _now()
        item = InventoryItem(
            id=_generate_id(),
            name=data.name,
            sku=data.sku,
            location=data.location,
            quantity=data.quantity,
            reorder_level=data.reorder_level,
            created_at=now,
            updated_at=now,
        )
        movement = InventoryMovement(
            id=_generate_id(),
            type="initial",
            item_id=item.id,
            quantity_change=item.quantity,
            note=INITIAL_NOTE,
            created_at=now,
        )

        with self._lock:
            self._commit(self._items + [item], self._movements + [movement])

        logger.info("Created item %s (sku=%s, quantity=%d)", item.id, item.sku, item.quantity)
        return replace(item)

    def update_item(self, item_id: str, payload: Mapping[str, Any]) -> InventoryItem:
        data: ItemUpdate = _validate(ItemUpdate, payload)
        changes: Dict[str, Any] = {
            field: getattr(data, field)
            for field in ("name", "sku", "location", "reorder_level")
            if field in data.model_fields_set
        }

        with self._lock:
            idx = self._index_of(item_id)
            updated = replace(self._items[idx], updated_at=_now(), **changes)
            items = list(self._items)
            items[idx] = updated
            self._commit(items, self._movements)

        logger.info("Updated item %s (%s)", item_id, ", ".join(sorted(changes)) or "no field changes")
        return replace(updated)

    def adjust_stock(self, item_id: str, delta: int, reason: Optional[str] = None) -> StockAdjustment:
        """Apply a signed quantity change and record it as an inbound/outbound movement."""
        if delta == 0:
            raise ValidationError({"quantity": "Quantity adjustment must be non-zero."})

        with self._lock:
            idx = self._index_of(item_id)
            current = self._items[idx]
            new_quantity = current.quantity + delta
            if new_quantity < 0:
                raise ValidationError({"quantity": "Cannot reduce stock below zero."})

            now = _now()
            updated = replace(current, quantity=new_quantity, updated_at=now)
            movement = InventoryMovement(
                id=_generate_id(),
                type="inbound" if delta > 0 else "outbound",
                item_id=item_id,
                quantity_change=delta,
                note=reason or (DEFAULT_INBOUND_NOTE if delta > 0 else DEFAULT_OUTBOUND_NOTE),
                created_at=now,
            )
            items = list(self._items)
            items[idx] = updated
            self._commit(items, self._movements + [movement])

        logger.info(
            "Adjusted item %s by %+d (%s), quantity now %d", item_id, delta, movement.note, new_quantity
        )
        return StockAdjustment(item=replace(updated), movement=movement)


def get_store(request: Request) -> InventoryStore:
    """FastAPI dependency: the store created by the application lifespan."""
    return request.app.state.store
