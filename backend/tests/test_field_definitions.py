"""Tests for custom row field definitions."""
import uuid

from plotkeeper.models import FieldType, RowFieldValue


def test_list_orders_by_display_order(field_definitions):
    field_definitions.create("Irrigation", FieldType.DROPDOWN, options=["Drip", "Sprinkler"], display_order=2)
    field_definitions.create("Crop", FieldType.TEXT, display_order=0)
    field_definitions.create("Spacing (cm)", FieldType.NUMBER, display_order=1)

    assert [d.name for d in field_definitions.list()] == ["Crop", "Spacing (cm)", "Irrigation"]


def test_create_appends_without_display_order(field_definitions):
    first = field_definitions.create("Crop", FieldType.TEXT)
    second = field_definitions.create("Mulched", FieldType.CHECKBOX)

    assert first.display_order == 0
    assert second.display_order == 1


def test_dropdown_options_round_trip(field_definitions):
    definition = field_definitions.create("Irrigation", FieldType.DROPDOWN, options=["Drip", "Sprinkler"])

    assert field_definitions.get(definition.id).options == ["Drip", "Sprinkler"]


def test_update_refreshes_updated_at(field_definitions):
    definition = field_definitions.create("Crop", FieldType.TEXT)
    before = definition.updated_at

    updated = field_definitions.update(definition.id, is_required=True)

    assert updated.is_required is True
    assert updated.updated_at >= before


def test_changing_type_keeps_options_unless_caller_clears_them(field_definitions):
    definition = field_definitions.create("Irrigation", FieldType.DROPDOWN, options=["Drip"])

    kept = field_definitions.update(definition.id, field_type=FieldType.TEXT)
    assert kept.options == ["Drip"]

    cleared = field_definitions.update(definition.id, field_type=FieldType.TEXT, options=[])
    assert cleared.options == []


def test_update_unknown_definition_returns_none(field_definitions):
    assert field_definitions.update(uuid.uuid4(), name="Nothing") is None


def test_delete_removes_values(db, field_definitions, field_values, aggregator, crop_field):
    row = aggregator.create_row({"name": "Row A"}, custom_fields=[(crop_field.id, "Tomato")])

    field_definitions.delete(crop_field.id)

    assert field_values.get_values_for_row(row.id) == []
    assert db.query(RowFieldValue).count() == 0


def test_move_swaps_with_neighbour(field_definitions):
    crop = field_definitions.create("Crop", FieldType.TEXT)
    spacing = field_definitions.create("Spacing", FieldType.NUMBER)
    mulched = field_definitions.create("Mulched", FieldType.CHECKBOX)

    ordered = field_definitions.move(mulched.id, "up")

    assert [d.id for d in ordered] == [crop.id, mulched.id, spacing.id]
    assert [d.display_order for d in ordered] == [0, 1, 2]


def test_move_at_the_edges_is_a_no_op(field_definitions):
    crop = field_definitions.create("Crop", FieldType.TEXT)
    spacing = field_definitions.create("Spacing", FieldType.NUMBER)

    assert [d.id for d in field_definitions.move(crop.id, "up")] == [crop.id, spacing.id]
    assert [d.id for d in field_definitions.move(spacing.id, "down")] == [crop.id, spacing.id]
