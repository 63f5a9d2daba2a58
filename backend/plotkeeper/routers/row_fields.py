"""Custom row field definition endpoints."""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from plotkeeper.auth import CurrentUser, get_current_user
from plotkeeper.database import get_db
from plotkeeper.schemas import (
    FieldDefinitionCreate, FieldDefinitionOut, FieldDefinitionUpdate, FieldMoveRequest,
)
from plotkeeper.services import FieldDefinitionStore

router = APIRouter(prefix="/row-fields", tags=["row-fields"])


@router.get("", response_model=List[FieldDefinitionOut])
def list_field_definitions(db: Session = Depends(get_db)):
    """Field definitions in display order (public)."""
    return FieldDefinitionStore(db).list()


@router.post("", response_model=FieldDefinitionOut, status_code=201)
def create_field_definition(
    data: FieldDefinitionCreate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return FieldDefinitionStore(db).create(
        name=data.name,
        field_type=data.field_type,
        options=data.options,
        is_required=data.is_required,
        display_order=data.display_order,
    )


@router.put("/{field_id}", response_model=FieldDefinitionOut)
def update_field_definition(
    field_id: UUID,
    data: FieldDefinitionUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    definition = FieldDefinitionStore(db).update(field_id, **data.model_dump(exclude_unset=True))
    if definition is None:
        raise HTTPException(status_code=404, detail="Field definition not found")
    return definition


@router.delete("/{field_id}", status_code=204)
def delete_field_definition(
    field_id: UUID,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Delete a definition and every value stored for it."""
    store = FieldDefinitionStore(db)
    if store.get(field_id) is None:
        raise HTTPException(status_code=404, detail="Field definition not found")
    store.delete(field_id)
    return None


@router.post("/{field_id}/move", response_model=List[FieldDefinitionOut])
def move_field_definition(
    field_id: UUID,
    data: FieldMoveRequest,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    store = FieldDefinitionStore(db)
    if store.get(field_id) is None:
        raise HTTPException(status_code=404, detail="Field definition not found")
    return store.move(field_id, data.direction)
