import pytest

from shelf_ledger.core.constants import PRODUCT_IMPORT_HEADERS, SHELF_IMPORT_HEADERS, ImportKind
from shelf_ledger.core.exceptions import MalformedImportHeaderError
from shelf_ledger.domain.location import LocationKey
from shelf_ledger.logic.rows import (
    ProductRow,
    ShelfAssignmentRow,
    parse_product_rows,
    parse_shelf_rows,
    template_rows,
    validate_header,
)

PRODUCT_HEADER = list(PRODUCT_IMPORT_HEADERS)
SHELF_HEADER = list(SHELF_IMPORT_HEADERS)


class TestHeaderValidation:
    def test_empty_input_is_fatal(self):
        with pytest.raises(MalformedImportHeaderError):
            parse_product_rows([])

    def test_reordered_header_is_fatal(self):
        header = ["商品名", "商品コード", "ケースあたりの数量", "最小在庫数"]

        with pytest.raises(MalformedImportHeaderError) as exc_info:
            parse_product_rows([header, ["PRD001", "豆", "24", "800"]])

        assert exc_info.value.error_code == "MALFORMED_IMPORT_HEADER"
        assert exc_info.value.actual == header

    def test_short_header_is_fatal(self):
        with pytest.raises(MalformedImportHeaderError):
            parse_shelf_rows([SHELF_HEADER[:4]])

    def test_product_header_is_not_a_shelf_header(self):
        with pytest.raises(MalformedImportHeaderError):
            validate_header(ImportKind.SHELVES, [PRODUCT_HEADER])

    def test_bom_whitespace_and_extra_columns_are_tolerated(self):
        header = ["\ufeff商品コード ", "列", " 番目", "レベル", "ケース数", "備考"]

        validate_header(ImportKind.SHELVES, [header])


class TestProductRows:
    def test_parses_valid_rows(self):
        parsed = parse_product_rows(
            [PRODUCT_HEADER, ["PRD004", "ほうじ茶", "12", "100"], ["PRD005", "煎茶", " 6 ", ""]]
        )

        assert parsed.rows == [
            ProductRow("PRD004", "ほうじ茶", 12, 100),
            ProductRow("PRD005", "煎茶", 6, 0),
        ]
        assert parsed.malformed == []

    def test_malformed_rows_are_skipped_not_fatal(self):
        parsed = parse_product_rows(
            [
                PRODUCT_HEADER,
                ["PRD004", "ほうじ茶", "0", "100"],
                ["PRD005", "煎茶", "abc", "1"],
                ["PRD006", "玄米茶"],
                ["", "名無し", "5", "1"],
                ["PRD007", "麦茶", "5", "-1"],
                ["PRD008", "番茶", "8", "40"],
            ]
        )

        assert [row.code for row in parsed.rows] == ["PRD008"]
        assert [m.row_number for m in parsed.malformed] == [2, 3, 4, 5, 6]

    def test_blank_rows_are_ignored(self):
        parsed = parse_product_rows([PRODUCT_HEADER, ["", "", "", ""], ["PRD004", "茶", "1", "0"]])

        assert len(parsed.rows) == 1
        assert parsed.malformed == []


class TestShelfRows:
    def test_parses_valid_rows(self):
        parsed = parse_shelf_rows([SHELF_HEADER, ["PRD001", "a", "1", "1", "24"]])

        assert parsed.rows == [ShelfAssignmentRow("PRD001", LocationKey("A", 1, 1), 24)]

    @pytest.mark.parametrize(
        "row",
        [
            ["PRD001", "Z", "1", "1", "24"],
            ["PRD001", "A", "16", "1", "24"],
            ["PRD001", "A", "1", "4", "24"],
            ["PRD001", "A", "1", "1", "0"],
            ["PRD001", "A", "1", "1", "1.5"],
            ["PRD001", "A", "1", "1"],
            [" ", "A", "1", "1", "3"],
        ],
    )
    def test_invalid_rows_are_reported(self, row):
        parsed = parse_shelf_rows([SHELF_HEADER, row])

        assert parsed.rows == []
        assert len(parsed.malformed) == 1
        assert parsed.malformed[0].row_number == 2


class TestTemplates:
    @pytest.mark.parametrize("kind", [ImportKind.PRODUCTS, ImportKind.SHELVES])
    def test_templates_parse_cleanly(self, kind):
        rows = template_rows(kind)
        parser = parse_product_rows if kind == ImportKind.PRODUCTS else parse_shelf_rows

        parsed = parser(rows)

        assert len(parsed.rows) == len(rows) - 1
        assert parsed.malformed == []
