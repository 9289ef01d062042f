from dataclasses import dataclass
from typing import Any, Dict, Optional

# 'initial' on item creation, 'inbound' / 'outbound' for positive / negative adjustments
MOVEMENT_TYPES = ("initial", "inbound", "outbound")


@dataclass(frozen=True)
class InventoryMovement:
    id: str
    type: str
    item_id: str
    quantity_change: int
    note: Optional[str]
    created_at: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "InventoryMovement":
        if record["type"] not in MOVEMENT_TYPES:
            raise ValueError(f"unknown movement type: {record['type']!r}")
        return cls(
            id=str(record["id"]),
            type=record["type"],
            item_id=str(record["item_id"]),
            quantity_change=int(record["quantity_change"]),
            note=record.get("note"),
            created_at=record["created_at"],
        )

    @property
    def to_schema(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "item_id": self.item_id,
            "quantity_change": self.quantity_change,
            "note": self.note,
            "created_at": self.created_at,
        }
