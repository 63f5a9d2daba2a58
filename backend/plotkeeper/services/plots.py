"""Store for plots, each optionally tagged with one plot category."""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, joinedload

from plotkeeper.models import Plot, Row
from plotkeeper.models._common import utcnow
from plotkeeper.services.batch import WriteBatch

_UPDATABLE = ("name", "description", "category_id")


class PlotStore:
    def __init__(self, session: Session):
        self.session = session

    def _select(self):
        return select(Plot).options(joinedload(Plot.category)).order_by(Plot.name)

    def list(self) -> List[Plot]:
        return list(self.session.scalars(self._select()))

    def list_by_category(self, category_id: UUID) -> List[Plot]:
        return list(self.session.scalars(self._select().where(Plot.category_id == category_id)))

    def get(self, plot_id: UUID) -> Optional[Plot]:
        return self.session.scalars(self._select().where(Plot.id == plot_id)).first()

    def create(self, name: str, description: Optional[str] = None, category_id: Optional[UUID] = None) -> Plot:
        plot = Plot(name=name, description=description, category_id=category_id)
        with WriteBatch(self.session, "create plot"):
            self.session.add(plot)
        return self.get(plot.id)

    def update(self, plot_id: UUID, **changes) -> Optional[Plot]:
        plot = self.session.get(Plot, plot_id)
        if plot is None:
            return None
        with WriteBatch(self.session, "update plot"):
            for key, value in changes.items():
                if key in _UPDATABLE:
                    setattr(plot, key, value)
            plot.updated_at = utcnow()
        self.session.expire(plot)
        return self.get(plot_id)

    def delete(self, plot_id: UUID) -> None:
        # Rows of the plot are removed by ON DELETE CASCADE.
        with WriteBatch(self.session, "delete plot"):
            self.session.execute(delete(Plot).where(Plot.id == plot_id))

    def summaries(self) -> List[Tuple[Plot, int]]:
        """Every plot with the number of rows it holds."""
        row_count = (
            select(func.count(Row.id))
            .where(Row.plot_id == Plot.id)
            .correlate(Plot)
            .scalar_subquery()
        )
        stmt = select(Plot, row_count).options(joinedload(Plot.category)).order_by(Plot.name)
        return [(plot, count) for plot, count in self.session.execute(stmt)]
