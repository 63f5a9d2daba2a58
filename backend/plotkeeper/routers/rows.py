"""Row API endpoints: joined row views, row writes, categories and custom field values."""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plotkeeper.auth import CurrentUser, get_current_user
from plotkeeper.config import get_settings
from plotkeeper.database import get_db
from plotkeeper.models import Row
from plotkeeper.schemas import (
    CategoryOut, FieldValueOut, RowCategoriesUpdate, RowCreate, RowDetail,
    RowFieldValuesUpdate, RowPositionsUpdate, RowStatusUpdate, RowUpdate,
)
from plotkeeper.services import CategoryAssignmentStore, FieldValueStore, RowAggregator

logger = logging.getLogger("plotkeeper.api.rows")

router = APIRouter(prefix="/rows", tags=["rows"])

limiter = Limiter(key_func=get_remote_address)

_EXTRAS = {"custom_fields", "categories"}


def _require_row(db: Session, row_id: UUID) -> None:
    if db.get(Row, row_id) is None:
        raise HTTPException(status_code=404, detail="Row not found")


@router.get("", response_model=List[RowDetail])
def list_rows(db: Session = Depends(get_db)):
    """All rows, newest first, with plot, categories and custom fields (public)."""
    return RowAggregator(db).get_rows()


@router.post("", response_model=RowDetail, status_code=201)
@limiter.limit(get_settings().write_rate_limit)
def create_row(
    request: Request,
    data: RowCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        row = RowAggregator(db).create_row(
            data.model_dump(exclude=_EXTRAS),
            custom_fields=data.custom_fields,
            categories=data.categories,
        )
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Unknown plot, category or field definition")
    logger.info(f"Row {row.id} created by {current_user.id}")
    return row


@router.put("/positions", status_code=204)
def update_row_positions(
    data: RowPositionsUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Reorder rows within one plot; rows of other plots are left alone."""
    RowAggregator(db).update_row_positions(data.plot_id, data.positions)
    return None


@router.get("/{row_id}", response_model=RowDetail)
def get_row(row_id: UUID, db: Session = Depends(get_db)):
    row = RowAggregator(db).get_row_by_id(row_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Row not found")
    return row


@router.put("/{row_id}", response_model=RowDetail)
def update_row(
    row_id: UUID,
    data: RowUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Update base fields; custom fields and categories only when sent."""
    try:
        row = RowAggregator(db).update_row(
            row_id,
            data.model_dump(exclude_unset=True, exclude=_EXTRAS),
            custom_fields=data.custom_fields,
            categories=data.categories,
        )
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Unknown plot, category or field definition")
    if row is None:
        raise HTTPException(status_code=404, detail="Row not found")
    return row


@router.put("/{row_id}/status", response_model=RowDetail)
def update_row_status(
    row_id: UUID,
    data: RowStatusUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    row = RowAggregator(db).update_row_status(row_id, data.status)
    if row is None:
        raise HTTPException(status_code=404, detail="Row not found")
    return row


@router.delete("/{row_id}", status_code=204)
def delete_row(
    row_id: UUID,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    _require_row(db, row_id)
    RowAggregator(db).delete_row(row_id)
    return None


# ── Category assignments ──────────────────────────────────────

@router.get("/{row_id}/categories", response_model=List[CategoryOut])
def get_row_categories(row_id: UUID, db: Session = Depends(get_db)):
    _require_row(db, row_id)
    return CategoryAssignmentStore(db).get_categories_for_row(row_id)


@router.put("/{row_id}/categories", response_model=List[CategoryOut])
def set_row_categories(
    row_id: UUID,
    data: RowCategoriesUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Replace the row's categories with exactly the given ones."""
    _require_row(db, row_id)
    store = CategoryAssignmentStore(db)
    try:
        store.set_categories_for_row(row_id, data.category_ids)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Unknown row category")
    return store.get_categories_for_row(row_id)


@router.post("/{row_id}/categories/{category_id}", response_model=List[CategoryOut], status_code=201)
def assign_row_category(
    row_id: UUID,
    category_id: UUID,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    _require_row(db, row_id)
    store = CategoryAssignmentStore(db)
    try:
        store.assign_category(row_id, category_id)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Category already assigned or unknown")
    return store.get_categories_for_row(row_id)


@router.delete("/{row_id}/categories/{category_id}", status_code=204)
def remove_row_category(
    row_id: UUID,
    category_id: UUID,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    _require_row(db, row_id)
    CategoryAssignmentStore(db).remove_category(row_id, category_id)
    return None


# ── Custom field values ───────────────────────────────────────

@router.get("/{row_id}/fields", response_model=List[FieldValueOut])
def get_row_field_values(row_id: UUID, db: Session = Depends(get_db)):
    _require_row(db, row_id)
    return FieldValueStore(db).get_values_for_row(row_id)


@router.put("/{row_id}/fields", response_model=List[FieldValueOut])
def set_row_field_values(
    row_id: UUID,
    data: RowFieldValuesUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Upsert custom field values; fields not listed keep their value."""
    _require_row(db, row_id)
    store = FieldValueStore(db)
    try:
        store.set_multiple_values(row_id, [(item.field_id, item.value) for item in data.values])
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Unknown field definition")
    return store.get_values_for_row(row_id)


@router.delete("/{row_id}/fields", status_code=204)
def clear_row_field_values(
    row_id: UUID,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    _require_row(db, row_id)
    FieldValueStore(db).delete_all_for_row(row_id)
    return None


@router.delete("/field-values/{value_id}", status_code=204)
def delete_field_value(
    value_id: UUID,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    FieldValueStore(db).delete_value(value_id)
    return None
