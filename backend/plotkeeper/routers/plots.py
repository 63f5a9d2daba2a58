"""Plot API endpoints."""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plotkeeper.auth import CurrentUser, get_current_user
from plotkeeper.database import get_db
from plotkeeper.schemas import PlotCreate, PlotOut, PlotSummary, PlotUpdate, RowDetail
from plotkeeper.services import PlotStore, RowAggregator

router = APIRouter(prefix="/plots", tags=["plots"])


@router.get("", response_model=List[PlotOut])
def list_plots(
    category_id: Optional[UUID] = Query(default=None),
    db: Session = Depends(get_db),
):
    """List plots by name, optionally only those of one category (public)."""
    store = PlotStore(db)
    if category_id is not None:
        return store.list_by_category(category_id)
    return store.list()


@router.get("/summary", response_model=List[PlotSummary])
def list_plot_summaries(db: Session = Depends(get_db)):
    """Plots with their row counts (public)."""
    result = []
    for plot, row_count in PlotStore(db).summaries():
        summary = PlotSummary.model_validate(plot)
        summary.row_count = row_count
        result.append(summary)
    return result


@router.post("", response_model=PlotOut, status_code=201)
def create_plot(
    data: PlotCreate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    try:
        return PlotStore(db).create(data.name, data.description, data.category_id)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Plot category does not exist")


@router.get("/{plot_id}", response_model=PlotOut)
def get_plot(plot_id: UUID, db: Session = Depends(get_db)):
    plot = PlotStore(db).get(plot_id)
    if not plot:
        raise HTTPException(status_code=404, detail="Plot not found")
    return plot


@router.put("/{plot_id}", response_model=PlotOut)
def update_plot(
    plot_id: UUID,
    data: PlotUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    try:
        plot = PlotStore(db).update(plot_id, **data.model_dump(exclude_unset=True))
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Plot category does not exist")
    if plot is None:
        raise HTTPException(status_code=404, detail="Plot not found")
    return plot


@router.delete("/{plot_id}", status_code=204)
def delete_plot(
    plot_id: UUID,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    """Delete a plot together with all of its rows."""
    store = PlotStore(db)
    if store.get(plot_id) is None:
        raise HTTPException(status_code=404, detail="Plot not found")
    store.delete(plot_id)
    return None


@router.get("/{plot_id}/rows", response_model=List[RowDetail])
def list_plot_rows(plot_id: UUID, db: Session = Depends(get_db)):
    """Rows of a plot in position order (public)."""
    return RowAggregator(db).get_rows_by_plot(plot_id)
