from __future__ import annotations

from dataclasses import dataclass

from shelf_ledger.core.constants import RefusalKind


@dataclass(frozen=True)
class Refusal:
    """
    The outcome of an operation that was not applied.

    Refusals are returned, never raised: the caller decides how to surface
    them. The ledger the operation was attempted on is left unchanged.
    """

    kind: RefusalKind
    message: str
    code: str | None = None
