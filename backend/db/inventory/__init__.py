"""
Warehouse inventory records.

Models:
- InventoryItem (a tracked SKU at a location, with a cached quantity)
- InventoryMovement (append-only signed quantity changes for an item)
"""

from .item import InventoryItem
from .movement import InventoryMovement, MOVEMENT_TYPES

__all__ = ["InventoryItem", "InventoryMovement", "MOVEMENT_TYPES"]
