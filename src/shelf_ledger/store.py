"""
Inventory Store Module.

The InventoryStore owns the one in-memory ledger collection shared by all
callers. It is the boundary the presentation layer talks to: it looks up the
product, turns loosely typed input into LocationKeys, delegates to the
MovementEngine, ReconciliationImporter or CatalogMerge, and swaps in the
result.

Writes follow a single-writer, copy-on-write discipline: each write runs
inside the store lock, computes a complete replacement collection, and
publishes it with one assignment. A mapping returned by snapshot() is never
modified afterwards.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from shelf_ledger.core.constants import DuplicateLocationPolicy, OperationType, RefusalKind
from shelf_ledger.core.exceptions import InvalidLocationError, MalformedImportHeaderError
from shelf_ledger.core.logging import get_logger
from shelf_ledger.domain.ledger import ProductLedger
from shelf_ledger.domain.location import DEFAULT_BOUNDS, GridBounds, LocationKey
from shelf_ledger.domain.refusal import Refusal
from shelf_ledger.logic.catalog import CatalogMerge
from shelf_ledger.logic.movement import MovementEngine
from shelf_ledger.logic.reconciliation import ReconciliationImporter
from shelf_ledger.logic.reports import (
    inventory_report_rows,
    location_occupancy,
    shortage_report_rows,
)
from shelf_ledger.logic.rows import RawRow, parse_product_rows, parse_shelf_rows
from shelf_ledger.schemas.operations import (
    LocationInput,
    OperationRequest,
    ProductImportSummary,
    ShelfImportSummary,
)

logger = get_logger(__name__)

LocationArg = LocationKey | LocationInput | str | None


class InventoryStore:
    """
    Process-wide product ledger collection with atomic, validated updates.

    The store is an ordinary object: create one at startup (see
    ``shelf_ledger.bootstrap.create_store``) and pass it to whatever needs it.

    Raises:
        InvalidLocationError: If an initial ledger holds stock outside ``bounds``.
    """

    def __init__(
        self,
        ledgers: Iterable[ProductLedger] = (),
        *,
        bounds: GridBounds = DEFAULT_BOUNDS,
        duplicate_policy: DuplicateLocationPolicy = DuplicateLocationPolicy.LAST_WINS,
        engine: MovementEngine | None = None,
    ):
        self.bounds = bounds
        self.engine = engine or MovementEngine()
        self.importer = ReconciliationImporter(duplicate_policy)
        self.catalog = CatalogMerge()
        self._lock = threading.Lock()

        initial: dict[str, ProductLedger] = {}
        for ledger in ledgers:
            ledger.check_invariants()
            for entry in ledger.locations:
                self._check_in_grid(ledger.code, entry.location)
            initial.setdefault(ledger.code, ledger)
        self._ledgers: Mapping[str, ProductLedger] = MappingProxyType(initial)

    # ----------------- reads -----------------

    def snapshot(self) -> Mapping[str, ProductLedger]:
        """The current collection. Later writes never change the returned mapping."""
        return self._ledgers

    def get(self, code: str) -> ProductLedger | None:
        return self._ledgers.get(code)

    def __len__(self) -> int:
        return len(self._ledgers)

    def __contains__(self, code: object) -> bool:
        return code in self._ledgers

    def low_stock(self) -> list[ProductLedger]:
        """Products below their minimum stock. Advisory only."""
        return [ledger for ledger in self._ledgers.values() if ledger.is_below_minimum]

    def inventory_report(self) -> list[list[str]]:
        return inventory_report_rows(self._ledgers.values())

    def shortage_report(self) -> list[list[str]]:
        return shortage_report_rows(self._ledgers.values())

    def occupancy(self) -> dict[LocationKey, list[tuple[str, int]]]:
        return location_occupancy(self._ledgers.values())

    # ----------------- movements -----------------

    def inbound(
        self, code: str, location: LocationArg, cases: int | None
    ) -> ProductLedger | Refusal:
        with self._lock:
            ledger = self._ledgers.get(code)
            if ledger is None:
                return self._unknown_product(code)
            key = self._resolve_location(code, location)
            if isinstance(key, Refusal):
                return key
            return self._commit(self.engine.inbound(ledger, key, cases))

    def outbound(
        self, code: str, location: LocationArg, cases: int | None
    ) -> ProductLedger | Refusal:
        with self._lock:
            ledger = self._ledgers.get(code)
            if ledger is None:
                return self._unknown_product(code)
            key = self._resolve_location(code, location)
            if isinstance(key, Refusal):
                return key
            return self._commit(self.engine.outbound(ledger, key, cases))

    def move(
        self,
        code: str,
        from_location: LocationArg,
        to_location: LocationArg,
        cases: int | None,
    ) -> ProductLedger | Refusal:
        with self._lock:
            ledger = self._ledgers.get(code)
            if ledger is None:
                return self._unknown_product(code)
            source = self._resolve_location(code, from_location)
            if isinstance(source, Refusal):
                return source
            destination = self._resolve_location(code, to_location)
            if isinstance(destination, Refusal):
                return destination
            return self._commit(self.engine.move(ledger, source, destination, cases))

    def execute(self, request: OperationRequest) -> ProductLedger | Refusal:
        """Runs an operation described by a request model."""
        if request.operation == OperationType.INBOUND:
            return self.inbound(request.code, request.to_location, request.cases)
        if request.operation == OperationType.OUTBOUND:
            return self.outbound(request.code, request.from_location, request.cases)
        return self.move(request.code, request.from_location, request.to_location, request.cases)

    # ----------------- catalog and imports -----------------

    def register_product(
        self,
        code: str | None,
        name: str | None,
        quantity_per_case: Any,
        minimum_stock: Any = 0,
    ) -> ProductLedger | Refusal:
        with self._lock:
            outcome = self.catalog.register_product(
                self._ledgers, code, name, quantity_per_case, minimum_stock
            )
            if isinstance(outcome, Refusal):
                return outcome
            return self._commit(outcome)

    def import_products(self, raw_rows: Sequence[RawRow]) -> ProductImportSummary:
        """
        Imports product definitions from header-led rows of string cells.

        Raises:
            MalformedImportHeaderError: If the header row is wrong. Nothing is imported.
        """
        try:
            parsed = parse_product_rows(raw_rows)
        except MalformedImportHeaderError as e:
            logger.error("product_import_rejected", error_code=e.error_code, detail=e.message)
            raise

        with self._lock:
            result = self.catalog.import_products(self._ledgers, parsed.rows, parsed.malformed)
            self._ledgers = MappingProxyType(result.ledgers)

        return ProductImportSummary(
            inserted_count=result.inserted_count,
            skipped_count=result.skipped_count,
            malformed_rows=len(result.malformed_rows),
        )

    def import_shelf_assignments(self, raw_rows: Sequence[RawRow]) -> ShelfImportSummary:
        """
        Replaces the location lists of the products named in header-led rows.

        Raises:
            MalformedImportHeaderError: If the header row is wrong. Nothing is imported.
        """
        try:
            parsed = parse_shelf_rows(raw_rows, self.bounds)
        except MalformedImportHeaderError as e:
            logger.error("shelf_import_rejected", error_code=e.error_code, detail=e.message)
            raise

        with self._lock:
            result = self.importer.import_shelf_assignments(
                self._ledgers, parsed.rows, parsed.malformed
            )
            self._ledgers = MappingProxyType(result.ledgers)

        return ShelfImportSummary(
            updated_count=result.updated_count,
            unknown_product_rows=result.unknown_product_rows,
            malformed_rows=len(result.malformed_rows),
            duplicate_locations=[f"{d.code}@{d.location.label}" for d in result.duplicates],
            rejected_products=result.rejected_products,
        )

    # ----------------- internal helpers -----------------

    def _commit(self, outcome: ProductLedger | Refusal) -> ProductLedger | Refusal:
        """Publishes a successful outcome. Must be called with the lock held."""
        if isinstance(outcome, Refusal):
            return outcome
        outcome.check_invariants()
        if self._ledgers.get(outcome.code) is not outcome:
            updated = dict(self._ledgers)
            updated[outcome.code] = outcome
            self._ledgers = MappingProxyType(updated)
        return outcome

    def _resolve_location(self, code: str, location: LocationArg) -> LocationKey | Refusal:
        if location is None:
            return Refusal(
                kind=RefusalKind.INVALID_QUANTITY,
                message="A location is required for this operation.",
                code=code,
            )
        try:
            if isinstance(location, LocationInput):
                return location.to_key(self.bounds)
            if isinstance(location, str):
                return LocationKey.from_label(location, self.bounds)
            return LocationKey.parse(
                location.column, location.position, location.level, self.bounds
            )
        except InvalidLocationError as e:
            return Refusal(kind=RefusalKind.INVALID_LOCATION, message=e.message, code=code)

    def _check_in_grid(self, code: str, location: LocationKey) -> None:
        try:
            LocationKey.parse(location.column, location.position, location.level, self.bounds)
        except InvalidLocationError as e:
            logger.error("initial_ledger_rejected", code=code, location=location.label)
            raise InvalidLocationError(
                f"{code} holds stock at {location.label}, outside the grid: {e.message}",
                e.field,
            ) from e

    def _unknown_product(self, code: str) -> Refusal:
        logger.info("movement_refused", code=code, reason=RefusalKind.UNKNOWN_PRODUCT)
        return Refusal(
            kind=RefusalKind.UNKNOWN_PRODUCT,
            message=f"Product {code} is not registered.",
            code=code,
        )
