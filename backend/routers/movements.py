from typing import List

from fastapi import APIRouter, Depends

from db.store import InventoryStore, get_store
from schemas.inventory import MovementRead

router = APIRouter()


@router.get("", response_model=List[MovementRead])
def list_movements(store: InventoryStore = Depends(get_store)):
    """Stock movement history, newest first"""
    return [MovementRead(**m.to_schema) for m in store.list_movements()]
