"""
Inventory Reports.

Builds the rows of the downloadable inventory reports as lists of strings.
Writing them to a file is left to the caller.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from shelf_ledger.core.constants import INVENTORY_REPORT_HEADERS, SHORTAGE_REPORT_HEADERS
from shelf_ledger.domain.ledger import ProductLedger
from shelf_ledger.domain.location import LocationKey


def inventory_report_rows(ledgers: Iterable[ProductLedger]) -> list[list[str]]:
    """Current stock of every product: total cases, total units and minimum stock."""
    rows = [list(INVENTORY_REPORT_HEADERS)]
    for ledger in ledgers:
        rows.append(
            [
                ledger.code,
                ledger.name,
                str(ledger.total_cases),
                str(ledger.total_quantity),
                str(ledger.minimum_stock),
            ]
        )
    return rows


def shortage_report_rows(ledgers: Iterable[ProductLedger]) -> list[list[str]]:
    """Products whose unit stock is below their minimum, with the missing units."""
    rows = [list(SHORTAGE_REPORT_HEADERS)]
    for ledger in ledgers:
        if not ledger.is_below_minimum:
            continue
        rows.append(
            [
                ledger.code,
                ledger.name,
                str(ledger.total_quantity),
                str(ledger.minimum_stock),
                str(ledger.shortage),
            ]
        )
    return rows


def location_occupancy(
    ledgers: Iterable[ProductLedger],
) -> dict[LocationKey, list[tuple[str, int]]]:
    """
    Inverts the ledgers into a grid view: which products sit in each location.

    Only occupied locations appear. Keys are sorted by column, position, level.
    """
    grid: dict[LocationKey, list[tuple[str, int]]] = defaultdict(list)
    for ledger in ledgers:
        for entry in ledger.locations:
            grid[entry.location].append((ledger.code, entry.cases))
    return {key: grid[key] for key in sorted(grid)}
