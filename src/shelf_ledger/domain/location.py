"""
Storage Grid Locations.

A location is a cell of the shelf grid addressed by column letter, position
along the column and shelf level. Locations are plain values: they exist only
as keys of the entries inside a product ledger.
"""

from __future__ import annotations

from dataclasses import dataclass

from shelf_ledger.core.constants import (
    DEFAULT_GRID_COLUMNS,
    DEFAULT_MAX_LEVEL,
    DEFAULT_MAX_POSITION,
)
from shelf_ledger.core.exceptions import InvalidLocationError


@dataclass(frozen=True)
class GridBounds:
    """
    columns (str): The allowed column letters, in display order.
    max_position (int): Highest position number within a column (positions start at 1).
    max_level (int): Highest shelf level (levels start at 1).
    """

    columns: str = DEFAULT_GRID_COLUMNS
    max_position: int = DEFAULT_MAX_POSITION
    max_level: int = DEFAULT_MAX_LEVEL


DEFAULT_BOUNDS = GridBounds()


def _parse_bounded_int(value: int | str, field: str, upper: int) -> int:
    if isinstance(value, bool):
        raise InvalidLocationError(f"{field} must be an integer, got {value!r}", field)
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidLocationError(f"{field} must be an integer, got {value!r}", field)
        number = int(text)
    elif isinstance(value, int):
        number = value
    else:
        raise InvalidLocationError(f"{field} must be an integer, got {value!r}", field)

    if not 1 <= number <= upper:
        raise InvalidLocationError(f"{field} must be between 1 and {upper}, got {number}", field)
    return number


@dataclass(frozen=True, order=True)
class LocationKey:
    """A single grid cell. Two keys are the same location iff all fields match."""

    column: str
    position: int
    level: int

    @classmethod
    def parse(
        cls,
        column: str,
        position: int | str,
        level: int | str,
        bounds: GridBounds = DEFAULT_BOUNDS,
    ) -> LocationKey:
        """
        Builds a key from loosely typed input (form fields, import cells).

        Raises:
            InvalidLocationError: If any field is missing, malformed or outside the grid.
        """
        if not isinstance(column, str) or not column.strip():
            raise InvalidLocationError(f"column is required, got {column!r}", "column")
        col = column.strip().upper()
        if len(col) != 1 or col not in bounds.columns:
            raise InvalidLocationError(
                f"column must be one of {bounds.columns[0]}..{bounds.columns[-1]}, got {column!r}",
                "column",
            )
        return cls(
            column=col,
            position=_parse_bounded_int(position, "position", bounds.max_position),
            level=_parse_bounded_int(level, "level", bounds.max_level),
        )

    @classmethod
    def from_label(cls, label: str, bounds: GridBounds = DEFAULT_BOUNDS) -> LocationKey:
        """Parses the ``A-1-1`` textual form."""
        parts = label.split("-")
        if len(parts) != 3:
            raise InvalidLocationError(
                f"location label must look like 'A-1-1', got {label!r}", "label"
            )
        return cls.parse(parts[0], parts[1], parts[2], bounds)

    @property
    def label(self) -> str:
        return f"{self.column}-{self.position}-{self.level}"

    def __str__(self) -> str:
        return self.label
