"""Tests for custom field values: upserts, typing and batch writes."""
from datetime import date, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from plotkeeper.models import FieldType, RowFieldDefinition, RowFieldValue
from plotkeeper.services.field_values import InvalidFieldValue, coerce_value


@pytest.fixture
def row(aggregator):
    return aggregator.create_row({"name": "Row A"})


def test_set_value_inserts_then_updates(db, field_values, row, crop_field):
    first = field_values.set_value(row.id, crop_field.id, "Tomato")
    first_id, first_updated = first.id, first.updated_at

    second = field_values.set_value(row.id, crop_field.id, "Pepper")

    assert second.id == first_id, "upsert must reuse the existing value row"
    assert second.value == "Pepper"
    assert second.updated_at >= first_updated
    assert db.query(RowFieldValue).count() == 1


def test_repeated_set_value_converges_to_one_value(db, field_values, row, crop_field):
    for value in ["Tomato", "Tomato", "Basil", "Tomato"]:
        field_values.set_value(row.id, crop_field.id, value)

    values = field_values.get_values_for_row(row.id)
    assert len(values) == 1
    assert values[0].value == "Tomato"
    assert db.query(RowFieldValue).filter_by(row_id=row.id, field_id=crop_field.id).count() == 1


def test_values_are_joined_with_definitions_in_display_order(field_values, field_definitions, row):
    mulched = field_definitions.create("Mulched", FieldType.CHECKBOX, display_order=1)
    crop = field_definitions.create("Crop", FieldType.TEXT, display_order=0)

    field_values.set_multiple_values(row.id, [(mulched.id, True), (crop.id, "Garlic")])

    values = field_values.get_values_for_row(row.id)
    assert [v.field_definition.name for v in values] == ["Crop", "Mulched"]
    assert [v.value for v in values] == ["Garlic", True]


def test_explicit_false_and_empty_are_stored(field_values, field_definitions, row):
    mulched = field_definitions.create("Mulched", FieldType.CHECKBOX)
    notes = field_definitions.create("Soil notes", FieldType.TEXT)

    field_values.set_multiple_values(row.id, [(mulched.id, False), (notes.id, "")])

    stored = {v.field_id: v.value for v in field_values.get_values_for_row(row.id)}
    assert stored == {mulched.id: False, notes.id: ""}


def test_set_multiple_values_is_all_or_nothing(field_values, field_definitions, row, crop_field):
    spacing = field_definitions.create("Spacing", FieldType.NUMBER)

    with pytest.raises(InvalidFieldValue):
        field_values.set_multiple_values(row.id, [(crop_field.id, "Tomato"), (spacing.id, "wide")])

    assert field_values.get_values_for_row(row.id) == []


def test_unknown_field_is_rejected_by_the_database(field_values, row):
    import uuid

    with pytest.raises(IntegrityError):
        field_values.set_value(row.id, uuid.uuid4(), "anything")


def test_delete_value_and_delete_all(field_values, field_definitions, row, crop_field):
    spacing = field_definitions.create("Spacing", FieldType.NUMBER)
    crop_value = field_values.set_value(row.id, crop_field.id, "Tomato")
    field_values.set_value(row.id, spacing.id, 45)

    field_values.delete_value(crop_value.id)
    assert [v.field_id for v in field_values.get_values_for_row(row.id)] == [spacing.id]

    field_values.delete_all_for_row(row.id)
    assert field_values.get_values_for_row(row.id) == []


def _definition(field_type, options=None):
    return RowFieldDefinition(name="Field", field_type=field_type, options=options)


@pytest.mark.parametrize(
    "field_type,options,value,expected",
    [
        (FieldType.TEXT, None, "Roma", "Roma"),
        (FieldType.NUMBER, None, 12, 12),
        (FieldType.NUMBER, None, "12.5", 12.5),
        (FieldType.NUMBER, None, "30", 30),
        (FieldType.DATE, None, "2026-04-01", "2026-04-01"),
        (FieldType.DATE, None, date(2026, 4, 1), "2026-04-01"),
        (FieldType.DATE, None, datetime(2026, 4, 1, 18, 30), "2026-04-01"),
        (FieldType.DROPDOWN, ["Drip", "Sprinkler"], "Drip", "Drip"),
        (FieldType.DROPDOWN, [], "Anything", "Anything"),
        (FieldType.CHECKBOX, None, False, False),
        (FieldType.CHECKBOX, None, None, None),
    ],
)
def test_coerce_value_accepts(field_type, options, value, expected):
    assert coerce_value(_definition(field_type, options), value) == expected


@pytest.mark.parametrize(
    "field_type,options,value",
    [
        (FieldType.TEXT, None, 42),
        (FieldType.NUMBER, None, True),
        (FieldType.NUMBER, None, "lots"),
        (FieldType.NUMBER, None, "nan"),
        (FieldType.NUMBER, None, "inf"),
        (FieldType.NUMBER, None, "-inf"),
        (FieldType.NUMBER, None, float("nan")),
        (FieldType.NUMBER, None, float("inf")),
        (FieldType.DATE, None, "01/04/2026"),
        (FieldType.DROPDOWN, ["Drip", "Sprinkler"], "Flood"),
        (FieldType.CHECKBOX, None, "yes"),
    ],
)
def test_coerce_value_rejects(field_type, options, value):
    with pytest.raises(InvalidFieldValue):
        coerce_value(_definition(field_type, options), value)
