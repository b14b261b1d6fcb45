"""In-memory shelf inventory ledger: inbound, outbound, move and bulk import."""

from shelf_ledger.core.constants import DuplicateLocationPolicy, OperationType, RefusalKind
from shelf_ledger.core.exceptions import (
    InvalidLocationError,
    LedgerInvariantError,
    MalformedImportHeaderError,
    ShelfLedgerError,
)
from shelf_ledger.domain.ledger import LocationEntry, ProductLedger
from shelf_ledger.domain.location import GridBounds, LocationKey
from shelf_ledger.domain.refusal import Refusal
from shelf_ledger.store import InventoryStore

__all__ = [
    "DuplicateLocationPolicy",
    "GridBounds",
    "InvalidLocationError",
    "InventoryStore",
    "LedgerInvariantError",
    "LocationEntry",
    "LocationKey",
    "MalformedImportHeaderError",
    "OperationType",
    "ProductLedger",
    "Refusal",
    "RefusalKind",
    "ShelfLedgerError",
]
