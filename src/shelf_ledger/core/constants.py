"""Ledger constants"""

from enum import StrEnum


class RefusalKind(StrEnum):
    """Reasons an operation is refused without changing the ledger"""

    INVALID_QUANTITY = "invalid_quantity"
    LOCATION_NOT_FOUND = "location_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    UNKNOWN_PRODUCT = "unknown_product"
    INVALID_LOCATION = "invalid_location"
    DUPLICATE_PRODUCT = "duplicate_product"
    MISSING_FIELD = "missing_field"


class OperationType(StrEnum):
    """Stock movement operations"""

    INBOUND = "inbound"
    OUTBOUND = "outbound"
    MOVE = "move"


class ImportKind(StrEnum):
    """Bulk import file kinds"""

    PRODUCTS = "products"
    SHELVES = "shelves"


class DuplicateLocationPolicy(StrEnum):
    """How a shelf import treats two rows for the same product and location"""

    LAST_WINS = "last_wins"
    REJECT = "reject"


# Column order of the bulk import files is a compatibility contract with
# upstream spreadsheet templates.
PRODUCT_IMPORT_HEADERS: tuple[str, ...] = (
    "商品コード",
    "商品名",
    "ケースあたりの数量",
    "最小在庫数",
)
SHELF_IMPORT_HEADERS: tuple[str, ...] = ("商品コード", "列", "番目", "レベル", "ケース数")

INVENTORY_REPORT_HEADERS: tuple[str, ...] = (
    "商品コード",
    "商品名",
    "総ケース数",
    "総在庫数",
    "最小在庫数",
)
SHORTAGE_REPORT_HEADERS: tuple[str, ...] = (
    "商品コード",
    "商品名",
    "現在庫数",
    "最小在庫数",
    "不足数",
)

DEFAULT_GRID_COLUMNS = "ABCDEFGHIJK"
DEFAULT_MAX_POSITION = 15
DEFAULT_MAX_LEVEL = 3
