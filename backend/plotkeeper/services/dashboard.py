"""Farm overview counts shown on the dashboard."""
from datetime import date
from typing import Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from plotkeeper.models import Plot, Row


def _month_bounds(today: date):
    start = today.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def dashboard_stats(db: Session, today: Optional[date] = None) -> dict:
    today = today or date.today()
    month_start, month_end = _month_bounds(today)

    planted_this_month = db.scalar(
        select(func.count(Row.id)).where(
            Row.planted_date >= month_start,
            Row.planted_date < month_end,
        )
    )

    return {
        "total_plots": db.scalar(select(func.count(Plot.id))),
        "total_rows": db.scalar(select(func.count(Row.id))),
        "planted_this_month": planted_this_month,
        "plot_categories_in_use": db.scalar(select(func.count(distinct(Plot.category_id)))),
    }
