"""Tests for row category assignments."""
import uuid

import pytest
from sqlalchemy.exc import IntegrityError


@pytest.fixture
def row(aggregator):
    return aggregator.create_row({"name": "Row A"})


@pytest.fixture
def tags(row_categories):
    return [row_categories.create(name) for name in ("Annual", "Companion", "Trellised")]


def test_set_categories_replaces_all(assignments, row, tags):
    annual, companion, trellised = tags
    assignments.set_categories_for_row(row.id, [annual.id, companion.id])

    assignments.set_categories_for_row(row.id, [trellised.id])

    assert [c.id for c in assignments.get_categories_for_row(row.id)] == [trellised.id]


def test_set_categories_to_empty(assignments, row, tags):
    assignments.set_categories_for_row(row.id, [t.id for t in tags])

    assignments.set_categories_for_row(row.id, [])

    assert assignments.get_categories_for_row(row.id) == []


def test_duplicate_ids_are_collapsed(assignments, row, tags):
    annual = tags[0]

    assignments.set_categories_for_row(row.id, [annual.id, annual.id])

    assert [c.id for c in assignments.get_categories_for_row(row.id)] == [annual.id]


def test_failed_replace_keeps_previous_categories(assignments, row, tags):
    annual = tags[0]
    assignments.set_categories_for_row(row.id, [annual.id])

    with pytest.raises(IntegrityError):
        assignments.set_categories_for_row(row.id, [uuid.uuid4()])

    assert [c.id for c in assignments.get_categories_for_row(row.id)] == [annual.id]


def test_row_ids_for_category(assignments, aggregator, tags):
    annual = tags[0]
    row_a = aggregator.create_row({"name": "Row A"}, categories=[annual.id])
    aggregator.create_row({"name": "Row B"})
    row_c = aggregator.create_row({"name": "Row C"}, categories=[annual.id])

    assert set(assignments.get_row_ids_for_category(annual.id)) == {row_a.id, row_c.id}


def test_assign_and_remove_single_category(assignments, row, tags):
    annual, companion, _ = tags

    assignments.assign_category(row.id, annual.id)
    assignments.assign_category(row.id, companion.id)
    assignments.remove_category(row.id, annual.id)

    assert [c.id for c in assignments.get_categories_for_row(row.id)] == [companion.id]


def test_assigning_twice_violates_uniqueness(assignments, row, tags):
    annual = tags[0]
    assignments.assign_category(row.id, annual.id)

    with pytest.raises(IntegrityError):
        assignments.assign_category(row.id, annual.id)

    assert len(assignments.get_categories_for_row(row.id)) == 1
