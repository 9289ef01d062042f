from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class InventoryItem:
    id: str
    name: str
    sku: str
    location: str
    quantity: int
    reorder_level: Optional[int]
    created_at: str
    updated_at: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "InventoryItem":
        reorder_level = record.get("reorder_level")
        return cls(
            id=str(record["id"]),
            name=record["name"],
            sku=record["sku"],
            location=record["location"],
            quantity=int(record["quantity"]),
            reorder_level=int(reorder_level) if reorder_level is not None else None,
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )

    @property
    def to_schema(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "location": self.location,
            "quantity": self.quantity,
            "reorder_level": self.reorder_level,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
