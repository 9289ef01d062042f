from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from db.store import InventoryStore
from main import create_app


@pytest.fixture()
def storage_file(tmp_path):
    return tmp_path / "data" / "inventory.json"


@pytest.fixture()
def store(storage_file):
    return InventoryStore(storage_file)


@pytest.fixture()
def widget():
    return {"name": "Widget", "sku": "W-1", "location": "A1", "quantity": 10}


@pytest.fixture()
def ticking_clock(monkeypatch):
    """Each timestamp the store asks for is one second after the previous one."""
    counter = itertools.count()
    ticks = (f"2024-01-15T10:{n // 60:02d}:{n % 60:02d}+00:00" for n in counter)
    monkeypatch.setattr("db.store._now", lambda: next(ticks))
    return ticks


@pytest.fixture()
def client(storage_file):
    app = create_app(Settings(storage_file=storage_file, cors_allow_origins=["*"]))
    with TestClient(app) as c:
        yield c
