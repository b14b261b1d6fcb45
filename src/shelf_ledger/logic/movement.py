"""
Movement Engine Module.

Applies single-location stock movements to a product ledger:

1. Inbound: cases arrive at a location.
2. Outbound: cases leave a location.
3. Move: cases are relocated from one location to another.

Each operation takes a ledger snapshot and returns either a new ledger or a
Refusal. Preconditions are validated in full before any new entry list is
built, so a refused operation never yields a partially updated ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeGuard

from shelf_ledger.core.constants import OperationType, RefusalKind
from shelf_ledger.core.logging import get_logger
from shelf_ledger.domain.ledger import LocationEntry, ProductLedger
from shelf_ledger.domain.location import LocationKey
from shelf_ledger.domain.refusal import Refusal

logger = get_logger(__name__)


@dataclass(frozen=True)
class InboundCommand:
    """
    location (LocationKey): The grid cell receiving the cases.
    cases (int | None): Number of cases received. Must be a positive integer.
    """

    location: LocationKey
    cases: int | None


@dataclass(frozen=True)
class OutboundCommand:
    """
    location (LocationKey): The grid cell the cases are taken from.
    cases (int | None): Number of cases shipped. Must be a positive integer.
    """

    location: LocationKey
    cases: int | None


@dataclass(frozen=True)
class MoveCommand:
    """
    from_location (LocationKey): The grid cell the cases are taken from.
    to_location (LocationKey): The grid cell receiving the cases.
    cases (int | None): Number of cases relocated. Must be a positive integer.
    """

    from_location: LocationKey
    to_location: LocationKey
    cases: int | None


MovementCommand = InboundCommand | OutboundCommand | MoveCommand


def _is_positive_int(value: Any) -> TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _add_cases(
    entries: tuple[LocationEntry, ...], location: LocationKey, cases: int
) -> list[LocationEntry]:
    out: list[LocationEntry] = []
    found = False
    for entry in entries:
        if entry.location == location:
            out.append(LocationEntry(location, entry.cases + cases))
            found = True
        else:
            out.append(entry)
    if not found:
        out.append(LocationEntry(location, cases))
    return out


def _remove_cases(
    entries: tuple[LocationEntry, ...], location: LocationKey, cases: int
) -> list[LocationEntry]:
    out: list[LocationEntry] = []
    for entry in entries:
        if entry.location != location:
            out.append(entry)
            continue
        remaining = entry.cases - cases
        # emptied locations are dropped, never kept at zero
        if remaining > 0:
            out.append(LocationEntry(location, remaining))
    return out


class MovementEngine:
    """
    Applies inbound, outbound and move operations to ledger snapshots.

    The engine holds no state: it never looks up or stores ledgers itself,
    that is the job of the InventoryStore.
    """

    def inbound(
        self, ledger: ProductLedger, location: LocationKey, cases: int | None
    ) -> ProductLedger | Refusal:
        """
        Receives cases into a location, creating the entry if it does not exist.

        Refuses with INVALID_QUANTITY unless cases is a positive integer.
        There is no upper bound on what a location can hold.
        """
        if not _is_positive_int(cases):
            return self._invalid_quantity(ledger, OperationType.INBOUND, cases)
        updated = ledger.with_locations(_add_cases(ledger.locations, location, cases))
        self._applied(updated, OperationType.INBOUND, cases, to_location=location)
        return updated

    def outbound(
        self, ledger: ProductLedger, location: LocationKey, cases: int | None
    ) -> ProductLedger | Refusal:
        """
        Removes cases from a location. Partial fulfilment is never performed.

        Refuses with INVALID_QUANTITY, LOCATION_NOT_FOUND when the product has
        no stock at the location, or INSUFFICIENT_STOCK when the location holds
        fewer cases than requested.
        """
        if not _is_positive_int(cases):
            return self._invalid_quantity(ledger, OperationType.OUTBOUND, cases)
        refusal = self._check_available(ledger, OperationType.OUTBOUND, location, cases)
        if refusal is not None:
            return refusal
        updated = ledger.with_locations(_remove_cases(ledger.locations, location, cases))
        self._applied(updated, OperationType.OUTBOUND, cases, from_location=location)
        return updated

    def move(
        self,
        ledger: ProductLedger,
        from_location: LocationKey,
        to_location: LocationKey,
        cases: int | None,
    ) -> ProductLedger | Refusal:
        """
        Relocates cases between two locations of the same product.

        Validation is the same as outbound against from_location. Totals are
        conserved; only the distribution over locations changes. Moving onto
        the source location is a validated no-op: it refuses like any other
        move but otherwise returns the ledger unchanged.
        """
        if not _is_positive_int(cases):
            return self._invalid_quantity(ledger, OperationType.MOVE, cases)
        refusal = self._check_available(ledger, OperationType.MOVE, from_location, cases)
        if refusal is not None:
            return refusal
        if from_location == to_location:
            logger.debug(
                "movement_noop",
                code=ledger.code,
                operation=OperationType.MOVE,
                location=from_location.label,
                cases=cases,
            )
            return ledger

        entries = _remove_cases(ledger.locations, from_location, cases)
        entries = _add_cases(tuple(entries), to_location, cases)
        updated = ledger.with_locations(entries)
        self._applied(
            updated,
            OperationType.MOVE,
            cases,
            from_location=from_location,
            to_location=to_location,
        )
        return updated

    def apply(self, ledger: ProductLedger, command: MovementCommand) -> ProductLedger | Refusal:
        """Dispatches a command object to the matching operation."""
        if isinstance(command, InboundCommand):
            return self.inbound(ledger, command.location, command.cases)
        if isinstance(command, OutboundCommand):
            return self.outbound(ledger, command.location, command.cases)
        if isinstance(command, MoveCommand):
            return self.move(ledger, command.from_location, command.to_location, command.cases)
        raise TypeError(f"Unsupported movement command: {type(command).__name__}")

    # ----------------- internal helpers -----------------

    def _invalid_quantity(
        self, ledger: ProductLedger, operation: OperationType, cases: Any
    ) -> Refusal:
        return self._refuse(
            ledger,
            operation,
            RefusalKind.INVALID_QUANTITY,
            f"Cases must be a positive integer, got {cases!r}.",
        )

    def _check_available(
        self,
        ledger: ProductLedger,
        operation: OperationType,
        location: LocationKey,
        cases: int,
    ) -> Refusal | None:
        entry = ledger.entry_for(location)
        if entry is None:
            return self._refuse(
                ledger,
                operation,
                RefusalKind.LOCATION_NOT_FOUND,
                f"{ledger.code} has no stock at {location.label}.",
            )
        if entry.cases < cases:
            return self._refuse(
                ledger,
                operation,
                RefusalKind.INSUFFICIENT_STOCK,
                f"{location.label} holds {entry.cases} cases of {ledger.code}, "
                f"{cases} requested.",
            )
        return None

    def _refuse(
        self,
        ledger: ProductLedger,
        operation: OperationType,
        kind: RefusalKind,
        message: str,
    ) -> Refusal:
        logger.info(
            "movement_refused",
            code=ledger.code,
            operation=operation,
            reason=kind,
            detail=message,
        )
        return Refusal(kind=kind, message=message, code=ledger.code)

    def _applied(
        self,
        ledger: ProductLedger,
        operation: OperationType,
        cases: int,
        from_location: LocationKey | None = None,
        to_location: LocationKey | None = None,
    ) -> None:
        logger.info(
            "movement_applied",
            code=ledger.code,
            operation=operation,
            cases=cases,
            from_location=from_location.label if from_location else None,
            to_location=to_location.label if to_location else None,
            total_cases=ledger.total_cases,
            total_quantity=ledger.total_quantity,
        )
