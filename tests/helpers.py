from shelf_ledger.domain.ledger import ProductLedger
from shelf_ledger.domain.location import LocationKey


def loc(label: str) -> LocationKey:
    """Shorthand for LocationKey.from_label("A-1-1")."""
    return LocationKey.from_label(label)


def assert_consistent(ledger: ProductLedger) -> None:
    ledger.check_invariants()
    assert ledger.total_cases == sum(e.cases for e in ledger.locations)
    assert ledger.total_quantity == ledger.total_cases * ledger.quantity_per_case
    assert all(e.cases > 0 for e in ledger.locations)
    assert len({e.location for e in ledger.locations}) == len(ledger.locations)
