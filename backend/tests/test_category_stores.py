"""Tests for the plot and row category stores."""
from plotkeeper.models import Plot, RowCategoryAssignment
from plotkeeper.models._common import DEFAULT_CATEGORY_COLOR


def test_list_orders_by_name(plot_categories):
    plot_categories.create("Orchard")
    plot_categories.create("Berries")
    plot_categories.create("Herbs")

    assert [c.name for c in plot_categories.list()] == ["Berries", "Herbs", "Orchard"]


def test_create_uses_default_color(row_categories):
    category = row_categories.create("Perennial", description="Comes back every year")

    assert category.id is not None
    assert category.color == DEFAULT_CATEGORY_COLOR
    assert category.description == "Comes back every year"
    assert category.created_at is not None


def test_update_applies_partial_fields(row_categories):
    category = row_categories.create("Annual", color="#f97316")

    updated = row_categories.update(category.id, color="#22c55e")

    assert updated.name == "Annual"
    assert updated.color == "#22c55e"


def test_update_unknown_category_returns_none(row_categories):
    import uuid

    assert row_categories.update(uuid.uuid4(), name="Ghost") is None


def test_plot_and_row_categories_are_independent(plot_categories, row_categories):
    plot_categories.create("Vegetables")

    assert row_categories.list() == []


def test_deleting_plot_category_detaches_plots(db, plot_categories, north_field):
    category_id = north_field.category_id

    plot_categories.delete(category_id)

    db.expire_all()
    plot = db.get(Plot, north_field.id)
    assert plot is not None, "plot must survive its category"
    assert plot.category_id is None
    assert plot_categories.get(category_id) is None


def test_deleting_row_category_removes_assignments(db, row_categories, assignments, aggregator, north_field):
    category = row_categories.create("Trellised")
    row = aggregator.create_row({"plot_id": north_field.id, "name": "Row A"}, categories=[category.id])

    row_categories.delete(category.id)

    assert assignments.get_categories_for_row(row.id) == []
    assert db.query(RowCategoryAssignment).count() == 0
