import pytest

from shelf_ledger.core.constants import RefusalKind
from shelf_ledger.domain.ledger import ProductLedger
from shelf_ledger.domain.refusal import Refusal
from shelf_ledger.logic.catalog import CatalogMerge
from shelf_ledger.logic.rows import ProductRow
from shelf_ledger.seed import seed_ledgers


def seeded_catalog() -> dict[str, ProductLedger]:
    return {ledger.code: ledger for ledger in seed_ledgers()}


class TestImportProducts:
    def test_inserts_new_products_with_empty_ledgers(self):
        result = CatalogMerge().import_products(
            seeded_catalog(), [ProductRow("PRD004", "ほうじ茶", 12, 100)]
        )

        created = result.ledgers["PRD004"]
        assert result.inserted_count == 1
        assert result.skipped_count == 0
        assert created.locations == ()
        assert created.total_cases == 0
        assert created.total_quantity == 0
        assert created.minimum_stock == 100

    def test_existing_codes_are_skipped(self):
        catalog = seeded_catalog()

        result = CatalogMerge().import_products(catalog, [ProductRow("PRD001", "別名", 1, 0)])

        assert result.inserted_count == 0
        assert result.skipped_count == 1
        assert result.skipped_codes == ["PRD001"]
        assert result.ledgers["PRD001"] is catalog["PRD001"]

    def test_duplicate_rows_in_one_batch_insert_once(self):
        rows = [ProductRow("PRD004", "ほうじ茶", 12, 100), ProductRow("PRD004", "別名", 6, 0)]

        result = CatalogMerge().import_products(seeded_catalog(), rows)

        assert result.inserted_count == 1
        assert result.skipped_count == 1
        # first registration wins
        assert result.ledgers["PRD004"].name == "ほうじ茶"

    def test_reimporting_the_same_row_skips_it(self):
        merge = CatalogMerge()
        rows = [ProductRow("PRD004", "ほうじ茶", 12, 100)]

        first = merge.import_products(seeded_catalog(), rows)
        second = merge.import_products(first.ledgers, rows)

        assert (first.inserted_count, first.skipped_count) == (1, 0)
        assert (second.inserted_count, second.skipped_count) == (0, 1)
        assert len(second.ledgers) == 4


class TestRegisterProduct:
    def test_registers_new_product(self):
        result = CatalogMerge().register_product({}, " PRD010 ", "緑茶", 30)

        assert isinstance(result, ProductLedger)
        assert result.code == "PRD010"
        assert result.minimum_stock == 0

    def test_duplicate_code_is_refused(self):
        result = CatalogMerge().register_product(seeded_catalog(), "PRD001", "豆", 24)

        assert isinstance(result, Refusal)
        assert result.kind == RefusalKind.DUPLICATE_PRODUCT

    def test_missing_fields_are_refused(self):
        merge = CatalogMerge()

        assert merge.register_product({}, "", "緑茶", 30).kind == RefusalKind.MISSING_FIELD
        assert merge.register_product({}, "P", None, 30).kind == RefusalKind.MISSING_FIELD

    @pytest.mark.parametrize("code, name", [(123, "緑茶"), ("P", 5), (["P"], "緑茶")])
    def test_non_text_code_or_name_is_refused(self, code, name):
        result = CatalogMerge().register_product({}, code, name, 30)

        assert isinstance(result, Refusal)
        assert result.kind == RefusalKind.MISSING_FIELD

    def test_bad_quantity_per_case_is_refused(self):
        merge = CatalogMerge()

        for value in (None, 0, -5, "24", 2.5):
            result = merge.register_product({}, "P", "p", value)
            assert result.kind == RefusalKind.INVALID_QUANTITY

    def test_negative_minimum_stock_is_refused(self):
        result = CatalogMerge().register_product({}, "P", "p", 10, minimum_stock=-1)

        assert result.kind == RefusalKind.INVALID_QUANTITY
