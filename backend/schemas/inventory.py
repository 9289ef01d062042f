import math
import re
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

MovementType = Literal["initial", "inbound", "outbound"]

INTEGER_RE = re.compile(r"[+-]?[0-9]+")
NUMERIC_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _as_int(value: Any) -> Optional[int]:
    """Numeric ints, floats and numeric strings truncate to int; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if INTEGER_RE.fullmatch(value):
            return int(value)
        if not NUMERIC_RE.fullmatch(value):
            return None
        value = float(value)
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None


def _required_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value.strip()


def _reorder_level(value: Any) -> Optional[int]:
    if value is None:
        return None
    level = _as_int(value)
    if level is None or level < 0:
        raise ValueError("Reorder level must be zero or greater when provided.")
    return level


class ItemCreate(BaseModel):
    # Field order is the order errors are reported in.
    quantity: int = Field(default=None, validate_default=True)
    name: str = Field(default=None, validate_default=True)
    sku: str = Field(default=None, validate_default=True)
    location: str = Field(default=None, validate_default=True)
    reorder_level: Optional[int] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        quantity = _as_int(v)
        if quantity is None:
            raise ValueError("Quantity is required and must be numeric.")
        if quantity < 0:
            raise ValueError("Quantity must be zero or greater.")
        return quantity

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return _required_text(v, "Name is required.")

    @field_validator("sku", mode="before")
    @classmethod
    def _sku(cls, v: Any) -> str:
        return _required_text(v, "SKU is required.")

    @field_validator("location", mode="before")
    @classmethod
    def _location(cls, v: Any) -> str:
        return _required_text(v, "Location is required.")

    @field_validator("reorder_level", mode="before")
    @classmethod
    def _reorder(cls, v: Any) -> Optional[int]:
        return _reorder_level(v)


class ItemUpdate(BaseModel):
    """Partial update. Only keys present in the payload (see model_fields_set) are applied."""

    quantity: Optional[Any] = None
    name: Optional[str] = None
    sku: Optional[str] = None
    location: Optional[str] = None
    reorder_level: Optional[int] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity_forbidden(cls, v: Any) -> None:
        if v is not None:
            raise ValueError("Quantity cannot be changed directly; use stock adjustments.")
        return None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return _required_text(v, "Name is required.")

    @field_validator("sku", mode="before")
    @classmethod
    def _sku(cls, v: Any) -> str:
        return _required_text(v, "SKU is required.")

    @field_validator("location", mode="before")
    @classmethod
    def _location(cls, v: Any) -> str:
        return _required_text(v, "Location is required.")

    @field_validator("reorder_level", mode="before")
    @classmethod
    def _reorder(cls, v: Any) -> Optional[int]:
        return _reorder_level(v)


class AdjustStockRequest(BaseModel):
    quantity: int = 0
    reason: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        if v is None:
            return 0
        quantity = _as_int(v)
        if quantity is None:
            raise ValueError("Quantity adjustment must be numeric.")
        return quantity

    @field_validator("reason")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ItemRead(BaseModel):
    id: str
    name: str
    sku: str
    location: str
    quantity: int
    reorder_level: Optional[int] = None
    created_at: str
    updated_at: str


class MovementRead(BaseModel):
    id: str
    type: MovementType
    item_id: str
    quantity_change: int
    note: Optional[str] = None
    created_at: str


class StockAdjustmentRead(BaseModel):
    item: ItemRead
    movement: MovementRead


class ServiceIndex(BaseModel):
    service: str
    endpoints: List[str]
