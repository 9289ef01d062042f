from typing import Dict


class InventoryError(Exception):
    """Base class for errors raised by the inventory store."""


class ValidationError(InventoryError):
    """One or more fields failed validation. Nothing was changed."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Validation failed")
        self.errors = dict(errors)


class NotFoundError(InventoryError):
    def __init__(self, item_id: str):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class StorageError(InventoryError):
    """Reading or writing the storage file failed."""


def field_errors(entries) -> Dict[str, str]:
    """Collapse pydantic error entries into a field -> message map (first error per field wins)."""
    out: Dict[str, str] = {}
    for entry in entries:
        loc = ".".join(str(part) for part in entry.get("loc", ()) if part != "body") or "body"
        error = (entry.get("ctx") or {}).get("error")
        out.setdefault(loc, str(error) if isinstance(error, ValueError) else entry.get("msg", "invalid"))
    return out
