from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from shelf_ledger.core.constants import OperationType
from shelf_ledger.domain.location import DEFAULT_BOUNDS, GridBounds, LocationKey


class LocationInput(BaseModel):
    """
    A grid location as entered by a caller: column letter, position and level.
    Values are checked against the grid when converted to a LocationKey.
    """

    column: str
    position: int | str
    level: int | str

    model_config = ConfigDict(extra="forbid")

    def to_key(self, bounds: GridBounds = DEFAULT_BOUNDS) -> LocationKey:
        return LocationKey.parse(self.column, self.position, self.level, bounds)


class OperationRequest(BaseModel):
    """
    Request contract for a single stock movement.

    Inbound uses ``to_location``, outbound uses ``from_location``, move uses
    both. ``cases`` is not range-checked here: a missing or
    non-positive value is answered with an INVALID_QUANTITY refusal, while
    booleans and numeric strings fail validation instead of being coerced.
    """

    operation: OperationType
    code: str = Field(..., min_length=1)
    from_location: LocationInput | None = None
    to_location: LocationInput | None = None
    cases: StrictInt | None = None

    model_config = ConfigDict(extra="forbid")


class ShelfImportSummary(BaseModel):
    """
    Response contract for a shelf assignment import.
    """

    updated_count: int
    unknown_product_rows: int = 0
    malformed_rows: int = 0
    duplicate_locations: list[str] = Field(default_factory=list)
    rejected_products: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ProductImportSummary(BaseModel):
    """
    Response contract for a product definition import.
    """

    inserted_count: int
    skipped_count: int
    malformed_rows: int = 0

    model_config = ConfigDict(extra="forbid")
