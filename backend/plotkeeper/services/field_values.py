"""
Store for custom field values.

Each (row, field definition) pair holds at most one value. Writes are
upserts: an existing value is overwritten and its updated_at refreshed,
otherwise a new value row is inserted. Values are checked against the
definition's field type before they reach the database; None is kept as an
explicit empty value, distinct from having no value row at all.
"""
import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from plotkeeper.models import FieldType, RowFieldDefinition, RowFieldValue
from plotkeeper.models._common import utcnow
from plotkeeper.services.batch import WriteBatch

logger = logging.getLogger("plotkeeper.field_values")


class InvalidFieldValue(ValueError):
    """A value does not match the type of its field definition."""


def _finite(definition: RowFieldDefinition, number: float) -> float:
    # NaN and infinities do not survive a JSON column.
    if not math.isfinite(number):
        raise InvalidFieldValue(f"{definition.name!r} expects a finite number")
    return number


def coerce_value(definition: RowFieldDefinition, value: Any) -> Any:
    """Return the value in the JSON form stored for the definition's type."""
    if value is None:
        return None

    field_type = FieldType(definition.field_type)
    if field_type is FieldType.CHECKBOX:
        if not isinstance(value, bool):
            raise InvalidFieldValue(f"{definition.name!r} expects true or false")
        return value

    if field_type is FieldType.NUMBER:
        if isinstance(value, bool):
            raise InvalidFieldValue(f"{definition.name!r} expects a number")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return _finite(definition, value)
        if isinstance(value, str) and value.strip():
            try:
                number = float(value)
            except ValueError:
                raise InvalidFieldValue(f"{definition.name!r} expects a number") from None
            number = _finite(definition, number)
            return int(number) if number.is_integer() and "." not in value else number
        raise InvalidFieldValue(f"{definition.name!r} expects a number")

    if field_type is FieldType.DATE:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str):
            try:
                return date.fromisoformat(value).isoformat()
            except ValueError:
                raise InvalidFieldValue(f"{definition.name!r} expects a YYYY-MM-DD date") from None
        raise InvalidFieldValue(f"{definition.name!r} expects a YYYY-MM-DD date")

    if not isinstance(value, str):
        raise InvalidFieldValue(f"{definition.name!r} expects text")
    if field_type is FieldType.DROPDOWN and definition.options and value and value not in definition.options:
        raise InvalidFieldValue(f"{value!r} is not an option of {definition.name!r}")
    return value


class FieldValueStore:
    def __init__(self, session: Session):
        self.session = session

    def get_values_for_row(self, row_id: UUID) -> List[RowFieldValue]:
        stmt = (
            select(RowFieldValue)
            .join(RowFieldValue.field_definition)
            .options(joinedload(RowFieldValue.field_definition))
            .where(RowFieldValue.row_id == row_id)
            .order_by(RowFieldDefinition.display_order, RowFieldDefinition.created_at)
        )
        return list(self.session.scalars(stmt))

    def _find(self, row_id: UUID, field_id: UUID) -> Optional[RowFieldValue]:
        stmt = select(RowFieldValue).where(
            RowFieldValue.row_id == row_id,
            RowFieldValue.field_id == field_id,
        )
        return self.session.scalars(stmt).first()

    def _upsert(self, row_id: UUID, field_id: UUID, value: Any) -> RowFieldValue:
        # An unknown field_id is left to the foreign key to reject.
        definition = self.session.get(RowFieldDefinition, field_id)
        if definition is not None:
            value = coerce_value(definition, value)

        existing = self._find(row_id, field_id)
        if existing is not None:
            existing.value = value
            existing.updated_at = utcnow()
            self.session.flush()
            return existing

        created = RowFieldValue(row_id=row_id, field_id=field_id, value=value)
        self.session.add(created)
        self.session.flush()
        return created

    def set_value(self, row_id: UUID, field_id: UUID, value: Any) -> RowFieldValue:
        with WriteBatch(self.session, "set field value"):
            stored = self._upsert(row_id, field_id, value)
        self.session.refresh(stored)
        return stored

    def set_multiple_values(self, row_id: UUID, values: Iterable[Tuple[UUID, Any]]) -> None:
        """Upsert several values for one row in a single transaction."""
        values = list(values)
        with WriteBatch(self.session, "set field values"):
            for field_id, value in values:
                self._upsert(row_id, field_id, value)
        logger.debug("Stored %d field value(s) for row %s", len(values), row_id)

    def delete_value(self, value_id: UUID) -> None:
        with WriteBatch(self.session, "delete field value"):
            self.session.execute(delete(RowFieldValue).where(RowFieldValue.id == value_id))

    def delete_all_for_row(self, row_id: UUID) -> None:
        with WriteBatch(self.session, "delete row field values"):
            self.session.execute(delete(RowFieldValue).where(RowFieldValue.row_id == row_id))
