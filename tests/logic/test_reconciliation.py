"""
Tests for the ReconciliationImporter.

A shelf import replaces the location list of every product it mentions and
leaves every other product alone.
"""

import pytest

from shelf_ledger.core.constants import DuplicateLocationPolicy
from shelf_ledger.domain.ledger import LocationEntry
from shelf_ledger.logic.reconciliation import ReconciliationImporter
from shelf_ledger.logic.rows import MalformedImportRow, ShelfAssignmentRow
from shelf_ledger.seed import seed_ledgers
from tests.helpers import assert_consistent, loc


@pytest.fixture
def catalog():
    return {ledger.code: ledger for ledger in seed_ledgers()}


def row(code: str, label: str, cases: int) -> ShelfAssignmentRow:
    return ShelfAssignmentRow(code=code, location=loc(label), cases=cases)


class TestImportShelfAssignments:
    def test_replaces_locations_of_referenced_products(self, catalog):
        importer = ReconciliationImporter()

        result = importer.import_shelf_assignments(
            catalog, [row("PRD001", "E-1-1", 5), row("PRD001", "F-2-2", 7)]
        )

        updated = result.ledgers["PRD001"]
        assert updated.locations == (
            LocationEntry(loc("E-1-1"), 5),
            LocationEntry(loc("F-2-2"), 7),
        )
        assert updated.total_cases == 12
        assert updated.total_quantity == 12 * 24
        assert result.updated_count == 1
        assert_consistent(updated)

    def test_unreferenced_products_are_untouched(self, catalog):
        result = ReconciliationImporter().import_shelf_assignments(
            catalog, [row("PRD001", "E-1-1", 5)]
        )

        assert result.ledgers["PRD002"] is catalog["PRD002"]
        assert result.ledgers["PRD003"] is catalog["PRD003"]

    def test_input_mapping_is_not_modified(self, catalog):
        before = dict(catalog)

        ReconciliationImporter().import_shelf_assignments(catalog, [row("PRD001", "E-1-1", 5)])

        assert catalog == before

    def test_unknown_products_are_dropped(self, catalog):
        result = ReconciliationImporter().import_shelf_assignments(
            catalog, [row("NOPE", "A-1-1", 3), row("PRD002", "B-1-1", 2)]
        )

        assert "NOPE" not in result.ledgers
        assert result.unknown_product_rows == 1
        assert result.updated_count == 1

    def test_malformed_rows_are_carried_into_result(self, catalog):
        malformed = [MalformedImportRow(row_number=3, reason="cases must be a positive integer")]

        result = ReconciliationImporter().import_shelf_assignments(catalog, [], malformed)

        assert result.malformed_rows == malformed
        assert result.updated_count == 0
        assert result.ledgers == catalog


class TestDuplicateLocations:
    ROWS = [
        ShelfAssignmentRow("PRD001", loc("A-1-1"), 24),
        ShelfAssignmentRow("PRD001", loc("A-1-1"), 6),
    ]

    def test_last_row_wins_and_is_flagged(self, catalog):
        importer = ReconciliationImporter(DuplicateLocationPolicy.LAST_WINS)

        result = importer.import_shelf_assignments(catalog, self.ROWS)

        updated = result.ledgers["PRD001"]
        assert updated.locations == (LocationEntry(loc("A-1-1"), 6),)
        assert updated.total_cases == 6
        assert len(result.duplicates) == 1
        duplicate = result.duplicates[0]
        assert (duplicate.code, duplicate.replaced_cases, duplicate.kept_cases) == ("PRD001", 24, 6)

    def test_reject_policy_keeps_prior_locations(self, catalog):
        importer = ReconciliationImporter(DuplicateLocationPolicy.REJECT)

        result = importer.import_shelf_assignments(
            catalog, [*self.ROWS, row("PRD002", "G-1-1", 1)]
        )

        assert result.ledgers["PRD001"] is catalog["PRD001"]
        assert result.rejected_products == ["PRD001"]
        assert result.ledgers["PRD002"].locations == (LocationEntry(loc("G-1-1"), 1),)
        assert result.updated_count == 1

    def test_same_location_for_different_products_is_not_a_duplicate(self, catalog):
        result = ReconciliationImporter().import_shelf_assignments(
            catalog, [row("PRD001", "A-1-1", 1), row("PRD002", "A-1-1", 2)]
        )

        assert result.duplicates == []
        assert result.updated_count == 2
