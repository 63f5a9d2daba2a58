"""Tests for the plot store and dashboard statistics."""
from datetime import date

from plotkeeper.services import dashboard_stats


def test_list_plots_by_name_with_category(plots, north_field):
    plots.create("Greenhouse")

    listed = plots.list()

    assert [p.name for p in listed] == ["Greenhouse", "North Field"]
    assert listed[1].category.name == "Vegetables"
    assert listed[0].category is None


def test_list_by_category(plots, plot_categories, north_field):
    orchard = plot_categories.create("Orchard")
    plots.create("Apple Block", category_id=orchard.id)

    assert [p.name for p in plots.list_by_category(orchard.id)] == ["Apple Block"]
    assert [p.name for p in plots.list_by_category(north_field.category_id)] == ["North Field"]


def test_update_plot_changes_category_and_timestamp(plots, plot_categories, north_field):
    orchard = plot_categories.create("Orchard")
    before = north_field.updated_at

    updated = plots.update(north_field.id, category_id=orchard.id, description="Sandy loam")

    assert updated.category.name == "Orchard"
    assert updated.description == "Sandy loam"
    assert updated.updated_at >= before


def test_clearing_plot_category(plots, north_field):
    updated = plots.update(north_field.id, category_id=None)

    assert updated.category_id is None
    assert updated.category is None


def test_summaries_count_rows(plots, aggregator, north_field):
    plots.create("Fallow")
    aggregator.create_row({"plot_id": north_field.id, "name": "Row 1"})
    aggregator.create_row({"plot_id": north_field.id, "name": "Row 2"})

    counts = {plot.name: row_count for plot, row_count in plots.summaries()}

    assert counts == {"Fallow": 0, "North Field": 2}


def test_dashboard_stats(db, plots, aggregator, north_field):
    plots.create("Fallow")
    aggregator.create_row({"plot_id": north_field.id, "name": "March row", "planted_date": date(2026, 3, 2)})
    aggregator.create_row({"plot_id": north_field.id, "name": "April row", "planted_date": date(2026, 4, 20)})
    aggregator.create_row({"name": "Unplanted"})

    stats = dashboard_stats(db, today=date(2026, 3, 28))

    assert stats == {
        "total_plots": 2,
        "total_rows": 3,
        "planted_this_month": 1,
        "plot_categories_in_use": 1,
    }


def test_dashboard_stats_in_december(db, aggregator):
    aggregator.create_row({"name": "Garlic", "planted_date": date(2026, 12, 31)})
    aggregator.create_row({"name": "Onions", "planted_date": date(2027, 1, 1)})

    assert dashboard_stats(db, today=date(2026, 12, 5))["planted_this_month"] == 1
