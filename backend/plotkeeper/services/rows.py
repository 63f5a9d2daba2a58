"""
Row aggregation.

A row as the UI sees it spans four tables: the base record, its plot (with
the plot's category), its category assignments and its custom field values.
RowAggregator composes that view from the assignment and field value stores
and owns the multi-step row writes, which run inside one WriteBatch so a
failing category or field update leaves the row untouched.
"""
import logging
from typing import Any, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, joinedload

from plotkeeper.models import Plot, Row, RowStatus
from plotkeeper.models._common import utcnow
from plotkeeper.schemas import CategoryOut, FieldValueOut, RowDetail
from plotkeeper.services.batch import WriteBatch
from plotkeeper.services.category_assignments import CategoryAssignmentStore
from plotkeeper.services.field_values import FieldValueStore

logger = logging.getLogger("plotkeeper.rows")

ROW_FIELDS = (
    "plot_id", "name", "variety", "planted_date", "expected_harvest",
    "notes", "position", "status",
)


def _field_pairs(custom_fields: Iterable[Any]) -> List[Tuple[UUID, Any]]:
    """Accept (field_id, value) tuples, dicts or objects with field_id/value."""
    pairs = []
    for item in custom_fields:
        if isinstance(item, tuple):
            pairs.append(item)
        elif isinstance(item, dict):
            pairs.append((item["field_id"], item.get("value")))
        else:
            pairs.append((item.field_id, item.value))
    return pairs


def _row_fields(fields: dict) -> dict:
    cleaned = {key: value for key, value in fields.items() if key in ROW_FIELDS}
    if cleaned.get("status") is not None:
        cleaned["status"] = RowStatus(cleaned["status"])
    return cleaned


class RowAggregator:
    def __init__(
        self,
        session: Session,
        field_values: Optional[FieldValueStore] = None,
        assignments: Optional[CategoryAssignmentStore] = None,
    ):
        self.session = session
        self.field_values = field_values or FieldValueStore(session)
        self.assignments = assignments or CategoryAssignmentStore(session)

    # ── Reads ─────────────────────────────────────────────────

    def _select(self):
        return select(Row).options(joinedload(Row.plot).joinedload(Plot.category))

    def _assemble(self, row: Row) -> RowDetail:
        detail = RowDetail.model_validate(row)
        detail.categories = [
            CategoryOut.model_validate(category)
            for category in self.assignments.get_categories_for_row(row.id)
        ]
        detail.custom_fields = [
            FieldValueOut.model_validate(value)
            for value in self.field_values.get_values_for_row(row.id)
        ]
        return detail

    def _assemble_all(self, stmt) -> List[RowDetail]:
        return [self._assemble(row) for row in self.session.scalars(stmt).unique()]

    def get_rows(self) -> List[RowDetail]:
        return self._assemble_all(self._select().order_by(Row.created_at.desc()))

    def get_rows_by_plot(self, plot_id: UUID) -> List[RowDetail]:
        stmt = (
            self._select()
            .where(Row.plot_id == plot_id)
            .order_by(Row.position, Row.created_at)
        )
        return self._assemble_all(stmt)

    def get_rows_by_category(self, category_id: UUID) -> List[RowDetail]:
        row_ids = self.assignments.get_row_ids_for_category(category_id)
        if not row_ids:
            return []
        stmt = (
            self._select()
            .where(Row.id.in_(row_ids))
            .order_by(Row.created_at.desc())
        )
        return self._assemble_all(stmt)

    def get_row_by_id(self, row_id: UUID) -> Optional[RowDetail]:
        row = self.session.scalars(self._select().where(Row.id == row_id)).first()
        if row is None:
            return None
        return self._assemble(row)

    # ── Writes ────────────────────────────────────────────────

    def _next_position(self, plot_id: Optional[UUID]) -> int:
        in_plot = Row.plot_id.is_(None) if plot_id is None else Row.plot_id == plot_id
        current = self.session.scalar(select(func.max(Row.position)).where(in_plot))
        return 0 if current is None else current + 1

    def _apply_extras(self, row_id: UUID, custom_fields, categories) -> None:
        if custom_fields is not None:
            self.field_values.set_multiple_values(row_id, _field_pairs(custom_fields))
        if categories is not None:
            self.assignments.set_categories_for_row(row_id, categories)

    def create_row(
        self,
        fields: dict,
        custom_fields: Optional[Iterable[Any]] = None,
        categories: Optional[Iterable[UUID]] = None,
    ) -> RowDetail:
        """Insert a row, then its custom field values and categories.

        Without an explicit position the row goes after the last row of its
        plot (0 for an empty plot). Positions are a max+1 counter and are
        neither gap-free nor safe against concurrent creation.
        """
        values = _row_fields(fields)
        with WriteBatch(self.session, "create row"):
            if values.get("position") is None:
                values["position"] = self._next_position(values.get("plot_id"))
            row = Row(**values)
            self.session.add(row)
            self.session.flush()
            row_id = row.id
            self._apply_extras(row_id, custom_fields, categories)

        logger.info(f"Created row {row_id} at position {values['position']}")
        return self.get_row_by_id(row_id)

    def update_row(
        self,
        row_id: UUID,
        fields: dict,
        custom_fields: Optional[Iterable[Any]] = None,
        categories: Optional[Iterable[UUID]] = None,
    ) -> Optional[RowDetail]:
        row = self.session.get(Row, row_id)
        if row is None:
            return None

        with WriteBatch(self.session, "update row"):
            for key, value in _row_fields(fields).items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            self.session.flush()
            self._apply_extras(row_id, custom_fields, categories)

        self.session.expire(row)
        return self.get_row_by_id(row_id)

    def update_row_status(self, row_id: UUID, status: RowStatus) -> Optional[RowDetail]:
        # Any status may follow any other.
        return self.update_row(row_id, {"status": status})

    def delete_row(self, row_id: UUID) -> None:
        # Field values and category assignments go with the row (ON DELETE CASCADE).
        with WriteBatch(self.session, "delete row"):
            self.session.execute(delete(Row).where(Row.id == row_id))
        logger.info(f"Deleted row {row_id}")

    def update_row_positions(self, plot_id: UUID, positions: Iterable[Any]) -> None:
        """Write each (row_id, position) pair, restricted to rows of `plot_id`.

        Entries naming a row of another plot match nothing and are skipped.
        """
        now = utcnow()
        with WriteBatch(self.session, "reorder rows"):
            for entry in positions:
                row_id, position = entry if isinstance(entry, tuple) else (entry.id, entry.position)
                self.session.execute(
                    update(Row)
                    .where(Row.id == row_id, Row.plot_id == plot_id)
                    .values(position=position, updated_at=now)
                )
