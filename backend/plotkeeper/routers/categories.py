"""Plot and row category endpoints."""
from typing import List, Type
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plotkeeper.auth import CurrentUser, get_current_user
from plotkeeper.database import get_db
from plotkeeper.schemas import CategoryCreate, CategoryOut, CategoryUpdate, RowDetail
from plotkeeper.services import PlotCategoryStore, RowAggregator, RowCategoryStore
from plotkeeper.services.categories import CategoryStore


def build_category_router(prefix: str, tag: str, store_class: Type[CategoryStore]) -> APIRouter:
    """CRUD routes shared by both kinds of category."""
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=List[CategoryOut])
    def list_categories(db: Session = Depends(get_db)):
        """List categories ordered by name (public)."""
        return store_class(db).list()

    @router.post("", response_model=CategoryOut, status_code=201)
    def create_category(
        data: CategoryCreate,
        db: Session = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        try:
            return store_class(db).create(data.name, data.description, data.color)
        except IntegrityError:
            raise HTTPException(status_code=409, detail="Category could not be created")

    @router.put("/{category_id}", response_model=CategoryOut)
    def update_category(
        category_id: UUID,
        data: CategoryUpdate,
        db: Session = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        category = store_class(db).update(category_id, **data.model_dump(exclude_unset=True))
        if category is None:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    @router.delete("/{category_id}", status_code=204)
    def delete_category(
        category_id: UUID,
        db: Session = Depends(get_db),
        _: CurrentUser = Depends(get_current_user),
    ):
        """Delete a category; references to it are cleared by the database."""
        store = store_class(db)
        if store.get(category_id) is None:
            raise HTTPException(status_code=404, detail="Category not found")
        store.delete(category_id)
        return None

    return router


plot_categories_router = build_category_router("/plot-categories", "plot-categories", PlotCategoryStore)
row_categories_router = build_category_router("/row-categories", "row-categories", RowCategoryStore)


@row_categories_router.get("/{category_id}/rows", response_model=List[RowDetail])
def list_rows_in_category(category_id: UUID, db: Session = Depends(get_db)):
    """Rows assigned to a row category (public)."""
    return RowAggregator(db).get_rows_by_category(category_id)
