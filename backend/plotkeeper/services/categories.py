"""Category stores: named, coloured tags for plots and for rows.

Both stores share one implementation; they differ only in the table they
manage. Deleting a category is a single DELETE: clearing plot references or
removing row assignments is done by the foreign keys.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from plotkeeper.models import PlotCategory, RowCategory
from plotkeeper.models._common import DEFAULT_CATEGORY_COLOR
from plotkeeper.services.batch import WriteBatch

_UPDATABLE = ("name", "description", "color")


class CategoryStore:
    model = None

    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List:
        return list(self.session.scalars(select(self.model).order_by(self.model.name)))

    def get(self, category_id: UUID):
        return self.session.get(self.model, category_id)

    def create(self, name: str, description: Optional[str] = None, color: str = DEFAULT_CATEGORY_COLOR):
        category = self.model(name=name, description=description, color=color)
        with WriteBatch(self.session, f"create {self.model.__tablename__}"):
            self.session.add(category)
        self.session.refresh(category)
        return category

    def update(self, category_id: UUID, **changes):
        """Apply the given fields; returns None when the category does not exist."""
        category = self.get(category_id)
        if category is None:
            return None
        with WriteBatch(self.session, f"update {self.model.__tablename__}"):
            for key, value in changes.items():
                if key in _UPDATABLE:
                    setattr(category, key, value)
        self.session.refresh(category)
        return category

    def delete(self, category_id: UUID) -> None:
        with WriteBatch(self.session, f"delete {self.model.__tablename__}"):
            self.session.execute(delete(self.model).where(self.model.id == category_id))


class PlotCategoryStore(CategoryStore):
    model = PlotCategory


class RowCategoryStore(CategoryStore):
    model = RowCategory
