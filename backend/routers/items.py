from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from db.store import InventoryStore, get_store
from schemas.inventory import AdjustStockRequest, ItemRead, MovementRead, StockAdjustmentRead

router = APIRouter()


@router.get("", response_model=List[ItemRead])
def list_items(store: InventoryStore = Depends(get_store)):
    """List all items ordered by SKU"""
    return [ItemRead(**item.to_schema) for item in store.list_items()]


@router.get("/{item_id}", response_model=ItemRead)
def get_item(item_id: str, store: InventoryStore = Depends(get_store)):
    return ItemRead(**store.get_item(item_id).to_schema)


@router.post("", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: Dict[str, Any] = Body(...),
    store: InventoryStore = Depends(get_store),
):
    """
    Register a new item.

    Records an 'initial' movement for the starting quantity.
    """
    return ItemRead(**store.create_item(payload).to_schema)


@router.put("/{item_id}", response_model=ItemRead)
def update_item(
    item_id: str,
    payload: Dict[str, Any] = Body(...),
    store: InventoryStore = Depends(get_store),
):
    """
    Update name, sku, location and/or reorder_level.

    Keys left out of the payload keep their current value. Quantity can only
    change through /items/{item_id}/adjust.
    """
    return ItemRead(**store.update_item(item_id, payload).to_schema)


@router.post("/{item_id}/adjust", response_model=StockAdjustmentRead)
def adjust_stock(
    item_id: str,
    payload: AdjustStockRequest,
    store: InventoryStore = Depends(get_store),
):
    """Positive quantity restocks, negative dispatches."""
    result = store.adjust_stock(item_id, payload.quantity, reason=payload.reason)
    return StockAdjustmentRead(
        item=ItemRead(**result.item.to_schema),
        movement=MovementRead(**result.movement.to_schema),
    )
