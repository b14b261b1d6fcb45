"""
Product Ledger Module.

A ProductLedger is the authoritative per-product stock record: how many cases
sit in which grid location, and the derived totals. Ledgers are immutable
values. Every change produces a complete replacement ledger whose totals are
recomputed from its entries, so a reader holding an older ledger never sees a
partially applied operation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from shelf_ledger.core.exceptions import LedgerInvariantError
from shelf_ledger.domain.location import LocationKey


@dataclass(frozen=True)
class LocationEntry:
    """Cases of one product held at one location. Cases are always positive."""

    location: LocationKey
    cases: int


@dataclass(frozen=True)
class ProductLedger:
    """
    code (str): Unique product code, the primary key.
    name (str): Display label.
    quantity_per_case (int): Units contained in one case. Always positive.
    locations (tuple[LocationEntry, ...]): At most one entry per location, in insertion order.
    minimum_stock (int): Advisory reorder threshold in units; has no effect on movements.
    """

    code: str
    name: str
    quantity_per_case: int
    locations: tuple[LocationEntry, ...] = ()
    minimum_stock: int = 0
    total_cases: int = field(init=False)
    total_quantity: int = field(init=False)

    def __post_init__(self) -> None:
        total = sum(entry.cases for entry in self.locations)
        object.__setattr__(self, "total_cases", total)
        object.__setattr__(self, "total_quantity", total * self.quantity_per_case)

    @classmethod
    def register(
        cls, code: str, name: str, quantity_per_case: int, minimum_stock: int = 0
    ) -> ProductLedger:
        """A newly registered product: no locations, zero totals."""
        return cls(
            code=code,
            name=name,
            quantity_per_case=quantity_per_case,
            minimum_stock=minimum_stock,
        )

    def with_locations(self, entries: Iterable[LocationEntry]) -> ProductLedger:
        """Returns a copy holding exactly ``entries``; totals are recomputed."""
        return ProductLedger(
            code=self.code,
            name=self.name,
            quantity_per_case=self.quantity_per_case,
            locations=tuple(entries),
            minimum_stock=self.minimum_stock,
        )

    def entry_for(self, location: LocationKey) -> LocationEntry | None:
        return next((e for e in self.locations if e.location == location), None)

    def cases_at(self, location: LocationKey) -> int:
        entry = self.entry_for(location)
        return entry.cases if entry else 0

    @property
    def is_below_minimum(self) -> bool:
        return self.total_quantity < self.minimum_stock

    @property
    def shortage(self) -> int:
        """Units missing to reach the minimum stock, zero when stocked enough."""
        return max(self.minimum_stock - self.total_quantity, 0)

    def check_invariants(self) -> None:
        """
        Raises LedgerInvariantError if the ledger is inconsistent.

        Operations never produce such a ledger; a failure here means a bug,
        not a bad request.
        """
        if self.quantity_per_case <= 0:
            raise LedgerInvariantError(
                f"quantity_per_case must be positive, got {self.quantity_per_case}", self.code
            )
        seen: set[LocationKey] = set()
        for entry in self.locations:
            if entry.cases <= 0:
                raise LedgerInvariantError(
                    f"entry {entry.location} holds {entry.cases} cases", self.code
                )
            if entry.location in seen:
                raise LedgerInvariantError(f"duplicate entry for {entry.location}", self.code)
            seen.add(entry.location)
        if self.total_cases != sum(e.cases for e in self.locations):
            raise LedgerInvariantError("total_cases does not match entries", self.code)
        if self.total_quantity != self.total_cases * self.quantity_per_case:
            raise LedgerInvariantError("total_quantity does not match total_cases", self.code)
