from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from plotkeeper.database import get_db
from plotkeeper.schemas import DashboardStats
from plotkeeper.services import dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats)
def get_dashboard(db: Session = Depends(get_db)):
    """Farm overview counts (public)."""
    return dashboard_stats(db)
