"""
Import Row Parsing Module.

Bulk imports arrive as rows of string cells, already split by the file
reader. The first row is the header and must match the fixed column order;
a mismatch aborts the whole import. Every other row is parsed on its own: a
row that fails to parse is recorded as malformed and skipped, and the rest of
the batch continues.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from shelf_ledger.core.constants import (
    PRODUCT_IMPORT_HEADERS,
    SHELF_IMPORT_HEADERS,
    ImportKind,
)
from shelf_ledger.core.exceptions import InvalidLocationError, MalformedImportHeaderError
from shelf_ledger.core.logging import get_logger
from shelf_ledger.domain.location import DEFAULT_BOUNDS, GridBounds, LocationKey

logger = get_logger(__name__)

RawRow = Sequence[str]

_BOM = "\ufeff"

T = TypeVar("T")


@dataclass(frozen=True)
class ProductRow:
    code: str
    name: str
    quantity_per_case: int
    minimum_stock: int


@dataclass(frozen=True)
class ShelfAssignmentRow:
    code: str
    location: LocationKey
    cases: int


@dataclass(frozen=True)
class MalformedImportRow:
    """
    row_number (int): 1-based line number in the source file, the header being line 1.
    reason (str): Why the row was skipped.
    """

    row_number: int
    reason: str


@dataclass
class ParsedRows(Generic[T]):
    rows: list[T] = field(default_factory=list)
    malformed: list[MalformedImportRow] = field(default_factory=list)


class RowError(ValueError):
    """A single data row cannot be parsed."""


def _positive_int(cell: str, field_name: str) -> int:
    text = cell.strip()
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        raise RowError(f"{field_name} must be a positive integer, got {cell!r}")
    return int(text)


def _non_negative_int(cell: str, field_name: str) -> int:
    text = cell.strip()
    if not text:
        return 0
    if not (text.isascii() and text.isdigit()):
        raise RowError(f"{field_name} must be a non-negative integer, got {cell!r}")
    return int(text)


def _is_blank(row: RawRow) -> bool:
    return all(not cell.strip() for cell in row)


def validate_header(kind: ImportKind, raw_rows: Sequence[RawRow]) -> None:
    """
    Checks the first row against the required column names, in order.

    Extra trailing header cells are tolerated.

    Raises:
        MalformedImportHeaderError: If the input is empty or the header does not match.
    """
    expected = PRODUCT_IMPORT_HEADERS if kind == ImportKind.PRODUCTS else SHELF_IMPORT_HEADERS
    if not raw_rows:
        raise MalformedImportHeaderError(kind, expected, [])

    header = [cell.strip() for cell in raw_rows[0]]
    if header:
        header[0] = header[0].lstrip(_BOM).strip()

    if len(header) < len(expected) or tuple(header[: len(expected)]) != expected:
        raise MalformedImportHeaderError(kind, expected, header)


def parse_product_row(row: RawRow) -> ProductRow:
    if len(row) < len(PRODUCT_IMPORT_HEADERS):
        raise RowError(f"expected {len(PRODUCT_IMPORT_HEADERS)} fields, got {len(row)}")
    code, name = row[0].strip(), row[1].strip()
    if not code:
        raise RowError("product code is empty")
    return ProductRow(
        code=code,
        name=name,
        quantity_per_case=_positive_int(row[2], "quantity per case"),
        minimum_stock=_non_negative_int(row[3], "minimum stock"),
    )


def parse_shelf_row(row: RawRow, bounds: GridBounds = DEFAULT_BOUNDS) -> ShelfAssignmentRow:
    if len(row) < len(SHELF_IMPORT_HEADERS):
        raise RowError(f"expected {len(SHELF_IMPORT_HEADERS)} fields, got {len(row)}")
    code = row[0].strip()
    if not code:
        raise RowError("product code is empty")
    try:
        location = LocationKey.parse(row[1], row[2], row[3], bounds)
    except InvalidLocationError as e:
        raise RowError(e.message) from e
    return ShelfAssignmentRow(code=code, location=location, cases=_positive_int(row[4], "cases"))


def _parse_all(
    kind: ImportKind, raw_rows: Sequence[RawRow], parse: Callable[[RawRow], T]
) -> ParsedRows[T]:
    validate_header(kind, raw_rows)

    parsed: ParsedRows[T] = ParsedRows()
    for index, row in enumerate(raw_rows[1:], start=2):
        if _is_blank(row):
            continue
        try:
            parsed.rows.append(parse(row))
        except RowError as e:
            logger.warning("import_row_malformed", kind=kind, row_number=index, reason=str(e))
            parsed.malformed.append(MalformedImportRow(row_number=index, reason=str(e)))
    return parsed


def parse_product_rows(raw_rows: Sequence[RawRow]) -> ParsedRows[ProductRow]:
    """Validates the header and parses every product definition row."""
    return _parse_all(ImportKind.PRODUCTS, raw_rows, parse_product_row)


def parse_shelf_rows(
    raw_rows: Sequence[RawRow], bounds: GridBounds = DEFAULT_BOUNDS
) -> ParsedRows[ShelfAssignmentRow]:
    """Validates the header and parses every shelf assignment row."""
    return _parse_all(ImportKind.SHELVES, raw_rows, lambda row: parse_shelf_row(row, bounds))


def template_rows(kind: ImportKind) -> list[list[str]]:
    """The downloadable import template: header plus sample rows."""
    if kind == ImportKind.PRODUCTS:
        return [
            list(PRODUCT_IMPORT_HEADERS),
            ["PRD001", "プレミアムコーヒー豆", "24", "800"],
            ["PRD002", "オーガニック紅茶", "36", "720"],
            ["PRD003", "抹茶パウダー", "20", "400"],
        ]
    return [
        list(SHELF_IMPORT_HEADERS),
        ["PRD001", "A", "1", "1", "24"],
        ["PRD001", "B", "3", "2", "26"],
        ["PRD002", "A", "1", "1", "12"],
    ]
