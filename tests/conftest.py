"""
Shared ledger fixtures.

Functions:
- ledger: PRD001 holding 24 cases at A-1-1, 24 units per case.
- empty_ledger: A freshly registered product with no locations.
- store: An InventoryStore holding the seed catalog.
"""

import pytest

from shelf_ledger.domain.ledger import LocationEntry, ProductLedger
from shelf_ledger.logic.movement import MovementEngine
from shelf_ledger.seed import seed_ledgers
from shelf_ledger.store import InventoryStore
from tests.helpers import loc


@pytest.fixture
def engine() -> MovementEngine:
    return MovementEngine()


@pytest.fixture
def ledger() -> ProductLedger:
    return ProductLedger.register("PRD001", "プレミアムコーヒー豆", 24, 800).with_locations(
        [LocationEntry(loc("A-1-1"), 24)]
    )


@pytest.fixture
def empty_ledger() -> ProductLedger:
    return ProductLedger.register("PRD009", "ほうじ茶", 12)


@pytest.fixture
def store() -> InventoryStore:
    return InventoryStore(seed_ledgers())
