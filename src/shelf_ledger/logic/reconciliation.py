"""
Shelf Reconciliation Module.

Merges externally supplied shelf assignments (e.g. the result of a physical
stock count) into the ledgers. For every product named in the batch, the
imported rows become its complete location list; products the batch does not
mention keep their locations. This path does not go through the
MovementEngine: it is a wholesale replacement, not a movement.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from shelf_ledger.core.constants import DuplicateLocationPolicy
from shelf_ledger.core.logging import get_logger
from shelf_ledger.domain.ledger import LocationEntry, ProductLedger
from shelf_ledger.domain.location import LocationKey
from shelf_ledger.logic.rows import MalformedImportRow, ShelfAssignmentRow

logger = get_logger(__name__)


@dataclass(frozen=True)
class DuplicateAssignment:
    """Two rows of one batch assigned the same product to the same location."""

    code: str
    location: LocationKey
    replaced_cases: int
    kept_cases: int


@dataclass
class ShelfImportResult:
    """
    ledgers (dict[str, ProductLedger]): The full collection after the import.
    updated_count (int): Products whose location list was replaced.
    unknown_product_rows (int): Rows dropped because their product code is not registered.
    malformed_rows (list[MalformedImportRow]): Rows skipped by the parser.
    duplicates (list[DuplicateAssignment]): Repeated product/location pairs found in the batch.
    rejected_products (list[str]): Products left untouched because of duplicates (reject policy).
    """

    ledgers: dict[str, ProductLedger]
    updated_count: int = 0
    unknown_product_rows: int = 0
    malformed_rows: list[MalformedImportRow] = field(default_factory=list)
    duplicates: list[DuplicateAssignment] = field(default_factory=list)
    rejected_products: list[str] = field(default_factory=list)


class ReconciliationImporter:
    """
    Replaces the location lists of the products referenced by a batch.

    Two rows for the same product and location cannot both be kept. With
    the LAST_WINS policy the later row replaces the earlier one and the
    overwrite is reported; with REJECT the product keeps its prior locations.
    """

    def __init__(
        self, duplicate_policy: DuplicateLocationPolicy = DuplicateLocationPolicy.LAST_WINS
    ):
        self.duplicate_policy = duplicate_policy

    def import_shelf_assignments(
        self,
        ledgers: Mapping[str, ProductLedger],
        rows: Sequence[ShelfAssignmentRow],
        malformed_rows: Sequence[MalformedImportRow] = (),
    ) -> ShelfImportResult:
        """
        Builds the replacement collection. ``ledgers`` itself is not modified.

        Args:
            ledgers: The current collection, keyed by product code.
            rows: Parsed assignment rows, cases already validated as positive.
            malformed_rows: Rows the parser skipped, carried into the result.
        """
        result = ShelfImportResult(ledgers=dict(ledgers), malformed_rows=list(malformed_rows))

        assignments: dict[str, dict[LocationKey, int]] = {}
        duplicated_codes: set[str] = set()

        for row in rows:
            if row.code not in ledgers:
                result.unknown_product_rows += 1
                logger.warning("shelf_import_unknown_product", code=row.code)
                continue

            per_product = assignments.setdefault(row.code, {})
            if row.location in per_product:
                duplicate = DuplicateAssignment(
                    code=row.code,
                    location=row.location,
                    replaced_cases=per_product[row.location],
                    kept_cases=row.cases,
                )
                result.duplicates.append(duplicate)
                duplicated_codes.add(row.code)
                logger.warning(
                    "shelf_import_duplicate_location",
                    code=row.code,
                    location=row.location.label,
                    replaced_cases=duplicate.replaced_cases,
                    kept_cases=duplicate.kept_cases,
                    policy=self.duplicate_policy,
                )
            # dict keeps first-insertion order, so an overwrite keeps the slot
            per_product[row.location] = row.cases

        for code, locations in assignments.items():
            if code in duplicated_codes and self.duplicate_policy == DuplicateLocationPolicy.REJECT:
                result.rejected_products.append(code)
                continue

            entries = [LocationEntry(location, cases) for location, cases in locations.items()]
            updated = ledgers[code].with_locations(entries)
            updated.check_invariants()
            result.ledgers[code] = updated
            result.updated_count += 1

        logger.info(
            "shelf_import_completed",
            rows=len(rows),
            updated_count=result.updated_count,
            unknown_product_rows=result.unknown_product_rows,
            malformed_rows=len(result.malformed_rows),
            duplicates=len(result.duplicates),
            rejected_products=len(result.rejected_products),
        )
        return result
