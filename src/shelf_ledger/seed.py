"""
Seed Catalog.

The sample products the store starts with when ``store.seed_on_startup`` is
enabled. Seeding goes through the same value types as any other write, so a
seeded ledger satisfies every ledger invariant.
"""

from shelf_ledger.core.exceptions import InvalidLocationError
from shelf_ledger.core.logging import get_logger
from shelf_ledger.domain.ledger import LocationEntry, ProductLedger
from shelf_ledger.domain.location import DEFAULT_BOUNDS, GridBounds, LocationKey

logger = get_logger(__name__)

# (code, name, quantity_per_case, minimum_stock, [(column, position, level, cases)])
SEED_PRODUCTS: list[tuple[str, str, int, int, list[tuple[str, int, int, int]]]] = [
    ("PRD001", "プレミアムコーヒー豆", 24, 800, [("A", 1, 1, 24), ("B", 3, 2, 26)]),
    ("PRD002", "オーガニック紅茶", 36, 720, [("A", 1, 1, 12), ("C", 5, 3, 18)]),
    ("PRD003", "抹茶パウダー", 20, 400, [("A", 1, 2, 18), ("D", 2, 1, 7)]),
]


def seed_ledgers(bounds: GridBounds = DEFAULT_BOUNDS) -> list[ProductLedger]:
    """
    Builds the sample ledgers for a grid.

    Sample entries that fall outside ``bounds`` are left out, so a smaller
    configured grid never starts with stock it cannot address.
    """
    ledgers = []
    for code, name, per_case, minimum, locations in SEED_PRODUCTS:
        entries = []
        for col, pos, lvl, cases in locations:
            try:
                key = LocationKey.parse(col, pos, lvl, bounds)
            except InvalidLocationError as e:
                logger.warning("seed_entry_skipped", code=code, reason=e.message)
                continue
            entries.append(LocationEntry(key, cases))
        ledger = ProductLedger.register(code, name, per_case, minimum)
        ledgers.append(ledger.with_locations(entries))
    return ledgers
