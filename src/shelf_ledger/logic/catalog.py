"""
Catalog Merge Module.

Registers new products, either one at a time or from a bulk product import.
Product codes are unique: the first registration of a code wins and any later
definition of the same code is skipped, never merged into the existing ledger.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from shelf_ledger.core.constants import RefusalKind
from shelf_ledger.core.logging import get_logger
from shelf_ledger.domain.ledger import ProductLedger
from shelf_ledger.domain.refusal import Refusal
from shelf_ledger.logic.rows import MalformedImportRow, ProductRow

logger = get_logger(__name__)


@dataclass
class ProductImportResult:
    ledgers: dict[str, ProductLedger]
    inserted_count: int = 0
    skipped_count: int = 0
    skipped_codes: list[str] = field(default_factory=list)
    malformed_rows: list[MalformedImportRow] = field(default_factory=list)


class CatalogMerge:
    def import_products(
        self,
        catalog: Mapping[str, ProductLedger],
        rows: Sequence[ProductRow],
        malformed_rows: Sequence[MalformedImportRow] = (),
    ) -> ProductImportResult:
        """
        Adds a fresh, empty ledger for every row whose code is not yet known.

        A code already in ``catalog``, or inserted by an earlier row of the same
        batch, is counted as skipped. ``catalog`` itself is not modified.
        """
        result = ProductImportResult(ledgers=dict(catalog), malformed_rows=list(malformed_rows))

        for row in rows:
            if row.code in result.ledgers:
                result.skipped_count += 1
                result.skipped_codes.append(row.code)
                continue
            result.ledgers[row.code] = ProductLedger.register(
                code=row.code,
                name=row.name,
                quantity_per_case=row.quantity_per_case,
                minimum_stock=row.minimum_stock,
            )
            result.inserted_count += 1

        logger.info(
            "product_import_completed",
            rows=len(rows),
            inserted_count=result.inserted_count,
            skipped_count=result.skipped_count,
            malformed_rows=len(result.malformed_rows),
        )
        return result

    def register_product(
        self,
        catalog: Mapping[str, ProductLedger],
        code: str | None,
        name: str | None,
        quantity_per_case: Any,
        minimum_stock: Any = 0,
    ) -> ProductLedger | Refusal:
        """Validates a single new product definition entered by hand."""
        code = code.strip() if isinstance(code, str) else ""
        name = name.strip() if isinstance(name, str) else ""
        if not code or not name:
            return Refusal(
                kind=RefusalKind.MISSING_FIELD,
                message="Product code and name are required text fields.",
                code=code or None,
            )
        if not _is_int(quantity_per_case) or quantity_per_case <= 0:
            return Refusal(
                kind=RefusalKind.INVALID_QUANTITY,
                message=f"Quantity per case must be a positive integer, got {quantity_per_case!r}.",
                code=code,
            )
        if not _is_int(minimum_stock) or minimum_stock < 0:
            return Refusal(
                kind=RefusalKind.INVALID_QUANTITY,
                message=f"Minimum stock must be a non-negative integer, got {minimum_stock!r}.",
                code=code,
            )
        if code in catalog:
            return Refusal(
                kind=RefusalKind.DUPLICATE_PRODUCT,
                message=f"Product code {code} is already registered.",
                code=code,
            )

        ledger = ProductLedger.register(code, name, quantity_per_case, minimum_stock)
        logger.info("product_registered", code=code, quantity_per_case=quantity_per_case)
        return ledger


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
